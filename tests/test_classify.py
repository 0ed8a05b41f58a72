import unittest

from feedmux.parsing import FeedFormat, classify_feed

from feed_fixtures import ATOM_DOC, RSS_DOC


class TestClassifyFeed(unittest.TestCase):
    def test_atom_needs_feed_tag_and_namespace(self):
        self.assertEqual(classify_feed(ATOM_DOC), FeedFormat.ATOM)

    def test_atom_match_is_case_insensitive(self):
        text = '<FEED xmlns="HTTP://WWW.W3.ORG/2005/ATOM"></FEED>'
        self.assertEqual(classify_feed(text), FeedFormat.ATOM)

    def test_feed_tag_without_namespace_is_not_atom(self):
        self.assertEqual(classify_feed('<feed><entry/></feed>'), FeedFormat.UNKNOWN)

    def test_rss_tag(self):
        self.assertEqual(classify_feed(RSS_DOC), FeedFormat.RSS)

    def test_rss_with_feed_word_elsewhere_stays_rss(self):
        text = '<rss version="2.0"><channel><title>My feed of feeds</title><feedburner/></channel></rss>'
        self.assertEqual(classify_feed(text), FeedFormat.RSS)

    def test_rss_1_namespace(self):
        text = '<rdf:RDF xmlns="http://purl.org/rss/1.0/"><item/></rdf:RDF>'
        self.assertEqual(classify_feed(text), FeedFormat.RSS)

    def test_unknown_and_empty_never_raise(self):
        self.assertEqual(classify_feed('<html><body>no feed</body></html>'), FeedFormat.UNKNOWN)
        self.assertEqual(classify_feed(''), FeedFormat.UNKNOWN)


if __name__ == '__main__':
    unittest.main()

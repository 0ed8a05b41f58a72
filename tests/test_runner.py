import tempfile
import unittest
from pathlib import Path

from feedmux.config import FeedConfig
from feedmux.models import Source
from feedmux.runner import run_once

from feed_fixtures import ATOM_DOC, EPOCH_2024_01_01, EPOCH_2024_01_02, RSS_DOC, StubFetcher


class TestRunOnce(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.config = FeedConfig(sources_path=self.tmp / 'feeds.txt')

    def tearDown(self):
        self._tmp.cleanup()

    async def test_posts_sorted_newest_first_undated_last(self):
        pages = {'http://a.test/': RSS_DOC, 'http://b.test/': ATOM_DOC}
        sources = [Source('en', 'A', 'http://a.test/'), Source('en', 'B', 'http://b.test/')]
        report = await run_once(self.config, sources=sources, fetcher=StubFetcher(pages))
        epochs = [p.published_epoch for p in report.posts]
        self.assertEqual(epochs, [EPOCH_2024_01_02, EPOCH_2024_01_02, EPOCH_2024_01_01, EPOCH_2024_01_01, None])
        self.assertTrue(report.log.startswith('All feed processing finished. Total posts retrieved: 5\n'))
        self.assertTrue(report.log.endswith('Loaded 2 feed urls.\n'))

    async def test_creates_default_source_file(self):
        fetcher = StubFetcher()
        report = await run_once(self.config, fetcher=fetcher)
        self.assertTrue(self.config.sources_path.exists())
        self.assertEqual(len(fetcher.calls), 2)
        self.assertEqual(report.posts, [])
        self.assertTrue(report.log.startswith('No posts found.\n'))
        self.assertIn('Loaded 2 feed urls.', report.log)

    async def test_empty_source_file(self):
        self.config.sources_path.write_text('# nothing yet\n', encoding='utf-8')
        fetcher = StubFetcher()
        report = await run_once(self.config, fetcher=fetcher)
        self.assertEqual(fetcher.calls, [])
        self.assertTrue(report.log.startswith('No feed items found in '))

    async def test_deadline_aborts_whole_run(self):
        self.config.deadline_seconds = 0.05
        fetcher = StubFetcher({'http://a.test/': RSS_DOC}, delay=5)
        report = await run_once(self.config, sources=[Source('en', 'A', 'http://a.test/')], fetcher=fetcher)
        self.assertEqual(report.posts, [])
        self.assertEqual(report.log, 'Error: Feed processing timed out after 0.05s.\nLoaded 1 feed urls.\n')


if __name__ == '__main__':
    unittest.main()

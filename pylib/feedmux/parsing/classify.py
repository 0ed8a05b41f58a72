'''Cheap substring heuristic deciding which feed grammar a document uses.'''

from enum import Enum

ATOM_NAMESPACE = 'http://www.w3.org/2005/atom'
RSS_NAMESPACE_FRAGMENT = 'http://purl.org/rss'


class FeedFormat(Enum):
    ATOM = 'atom'  # <feed> with <entry> records
    RSS = 'rss'  # <rss>/<channel> (or RSS 1.0 RDF) with <item> records
    UNKNOWN = 'unknown'


def classify_feed(text: str) -> FeedFormat:
    '''
    Atom needs both a <feed opening tag and the Atom namespace; RSS needs an
    <rss opening tag or the RSS 1.0 namespace. Never raises.
    '''
    lowered = text.lower()
    if '<feed' in lowered and ATOM_NAMESPACE in lowered:
        return FeedFormat.ATOM
    if '<rss' in lowered or RSS_NAMESPACE_FRAGMENT in lowered:
        return FeedFormat.RSS
    return FeedFormat.UNKNOWN

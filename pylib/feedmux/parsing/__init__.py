'''Feed format classification, streaming entry extraction, and date normalization.'''

from feedmux.parsing.classify import FeedFormat, classify_feed
from feedmux.parsing.dates import parse_date_to_epoch
from feedmux.parsing.extract import parse_feed_text, parse_with
from feedmux.parsing.handlers import AtomEntryHandler, RssItemHandler

__all__ = [
    'AtomEntryHandler',
    'FeedFormat',
    'RssItemHandler',
    'classify_feed',
    'parse_date_to_epoch',
    'parse_feed_text',
    'parse_with',
]

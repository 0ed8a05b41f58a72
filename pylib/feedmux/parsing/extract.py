'''Streaming extraction of posts from fetched feed text.'''

import io
from xml.sax import SAXException, make_parser
from xml.sax.handler import feature_external_ges, feature_namespaces

import structlog

from feedmux.errors import FeedParseError, UnknownFeedFormat
from feedmux.models import Post
from feedmux.parsing.classify import FeedFormat, classify_feed
from feedmux.parsing.handlers import AtomEntryHandler, RecordHandler, RssItemHandler

logger = structlog.get_logger()

CHUNK_SIZE = 64 * 1024

HANDLERS: dict[FeedFormat, type[RecordHandler]] = {
    FeedFormat.ATOM: AtomEntryHandler,
    FeedFormat.RSS: RssItemHandler,
}


def _run_handler(text: str, handler: RecordHandler) -> None:
    '''
    Feed text to an incremental expat reader in chunks. Text (not bytes) is
    fed, so an encoding named in the XML declaration never overrides the
    charset the fetcher already decoded with.
    '''
    parser = make_parser()
    parser.setFeature(feature_namespaces, False)
    parser.setFeature(feature_external_ges, False)
    parser.setContentHandler(handler)
    # expat rejects anything ahead of the XML declaration
    stream = io.StringIO(text.lstrip('\ufeff \t\r\n'))
    while chunk := stream.read(CHUNK_SIZE):
        parser.feed(chunk)
    parser.close()


def parse_with(text: str, feed_format: FeedFormat, language: str) -> list[Post]:
    '''Run the handler for feed_format over text. Raises FeedParseError on malformed markup.'''
    handler_cls = HANDLERS.get(feed_format)
    if handler_cls is None:
        raise UnknownFeedFormat('Unknown or unsupported feed type')
    handler = handler_cls(language)
    try:
        _run_handler(text, handler)
    except (SAXException, ValueError) as e:
        raise FeedParseError(str(e)) from e
    for post in handler.posts:
        post.language = language
    if handler.skipped:
        logger.info('records skipped', format=feed_format.value, skipped=handler.skipped, kept=len(handler.posts))
    return handler.posts


def parse_feed_text(text: str, language: str) -> list[Post]:
    '''
    Classify text and extract its posts, each stamped with language.

    Raises FeedParseError when text is blank, matches neither format, or
    cannot be tokenized.
    '''
    if not text or not text.strip():
        raise FeedParseError('Feed string is blank')
    return parse_with(text, classify_feed(text), language)

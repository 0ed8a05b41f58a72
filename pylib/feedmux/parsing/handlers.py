'''
SAX content handlers that pull post records out of Atom and RSS documents.

Both handlers share one state machine: an in-record flag toggled by the
record tag, per-record scratch fields reset when a record opens, and a text
accumulator for whichever field element is currently open. Element names are
matched on the lowercased qualified name, so RSS's Dublin Core date is
matched as "dc:date".
'''

from abc import ABC, abstractmethod
from enum import Enum
from xml.sax.handler import ContentHandler
from xml.sax.xmlreader import AttributesImpl

import structlog

from feedmux.models import Post
from feedmux.parsing.dates import parse_date_to_epoch

logger = structlog.get_logger()


class Field(Enum):
    TITLE = 'title'
    LINK = 'link'
    PUBLISHED = 'published'
    UPDATED = 'updated'


class RecordHandler(ContentHandler, ABC):
    '''
    Shared record/field state machine. Subclasses set RECORD_TAG and
    FIELD_TAGS (element name -> Field whose text is captured).
    '''

    RECORD_TAG = ''
    FIELD_TAGS: dict[str, Field] = {}
    kind = 'record'

    def __init__(self, language: str) -> None:
        super().__init__()
        self.language = language
        self.posts: list[Post] = []
        self.skipped = 0
        self._in_record = False
        self._fields: dict[Field, str] = {}
        # Field being captured, and the tag that opened it
        self._capturing: Field | None = None
        self._capture_tag: str | None = None
        self._buffer: list[str] = []

    def startElement(self, name: str, attrs: AttributesImpl) -> None:
        tag = name.lower()
        if tag == self.RECORD_TAG:
            self._in_record = True
            self._fields = {}
            self._capturing = None
            self._capture_tag = None
            return
        if not self._in_record or self._capturing is not None:
            return
        field = self.FIELD_TAGS.get(tag)
        if field is not None:
            self._capturing = field
            self._capture_tag = tag
            self._buffer = []
        self.on_record_child(tag, attrs)

    def characters(self, content: str) -> None:
        if self._capturing is not None:
            self._buffer.append(content)

    def endElement(self, name: str) -> None:
        if not self._in_record:
            return
        tag = name.lower()
        if self._capturing is not None and tag == self._capture_tag:
            self._fields[self._capturing] = ''.join(self._buffer).strip()
            self._capturing = None
            self._capture_tag = None
            self._buffer = []
        elif tag == self.RECORD_TAG:
            self._close_record()

    def on_record_child(self, tag: str, attrs: AttributesImpl) -> None:
        '''Hook for fields carried in attributes rather than text.'''

    @abstractmethod
    def date_candidate(self) -> str | None:
        '''Raw date text for the record being closed, or None.'''

    def _close_record(self) -> None:
        self._in_record = False
        title = self._fields.get(Field.TITLE, '').strip()
        link = self._fields.get(Field.LINK, '').strip()
        if not title or not link:
            self.skipped += 1
            logger.warning(
                f'skipped {self.kind}', title=title or 'N/A', link=link or 'N/A', language=self.language
            )
            return
        date = self.date_candidate()
        published = parse_date_to_epoch(date) if date else None
        self.posts.append(Post(title=title, link=link, language=self.language, published_epoch=published))


class AtomEntryHandler(RecordHandler):
    '''
    Atom: <entry> records; link from the <link href> attribute, date from
    <published> falling back to <updated>.
    '''

    RECORD_TAG = 'entry'
    FIELD_TAGS = {
        'title': Field.TITLE,
        'published': Field.PUBLISHED,
        'updated': Field.UPDATED,
    }
    kind = 'entry'

    def __init__(self, language: str) -> None:
        super().__init__(language)
        self._alternate_seen = False

    def startElement(self, name: str, attrs: AttributesImpl) -> None:
        if name.lower() == self.RECORD_TAG:
            self._alternate_seen = False
        super().startElement(name, attrs)

    def on_record_child(self, tag: str, attrs: AttributesImpl) -> None:
        if tag != 'link':
            return
        href = (attrs.get('href') or '').strip()
        if not href:
            return
        # rel="alternate" (the default when rel is absent) is the entry's page
        is_alternate = (attrs.get('rel') or 'alternate').strip().lower() == 'alternate'
        if is_alternate and not self._alternate_seen:
            self._fields[Field.LINK] = href
            self._alternate_seen = True
        elif Field.LINK not in self._fields:
            self._fields[Field.LINK] = href

    def date_candidate(self) -> str | None:
        return self._fields.get(Field.PUBLISHED) or self._fields.get(Field.UPDATED) or None


class RssItemHandler(RecordHandler):
    '''RSS: <item> records; title and link from text, date from <pubDate> or <dc:date>.'''

    RECORD_TAG = 'item'
    FIELD_TAGS = {
        'title': Field.TITLE,
        'link': Field.LINK,
        'pubdate': Field.PUBLISHED,
        'dc:date': Field.PUBLISHED,
    }
    kind = 'item'

    def date_candidate(self) -> str | None:
        return self._fields.get(Field.PUBLISHED) or None

'''Source list loader: one "language,title,url" line per feed.'''

from pathlib import Path

import structlog

from feedmux.models import Source

logger = structlog.get_logger()

DEFAULT_SOURCES = '''en,Slashdot,https://rss.slashdot.org/Slashdot/slashdotMain
en,TED,https://www.youtube.com/feeds/videos.xml?channel_id=UCAuUUnT6oDeKwE6v1NGQxug
'''


def parse_sources(text: str) -> list[Source]:
    '''
    Parse source lines. Blank lines and # comments are skipped; so are lines
    without three non-empty comma-separated parts. The URL is everything
    after the second comma.
    '''
    sources: list[Source] = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        parts = line.split(',', 2)
        if len(parts) != 3:
            logger.warning('skipping malformed source line (incorrect parts count)', line=line)
            continue
        language, title, url = (p.strip() for p in parts)
        if not (language and title and url):
            logger.warning('skipping malformed source line (empty parts)', line=line)
            continue
        sources.append(Source(language=language, title=title, url=url))
    return sources


def init_sources_file(path: Path, initial_content: str = DEFAULT_SOURCES) -> Path:
    '''Create the source file with initial_content if it does not exist yet.'''
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(initial_content, encoding='utf-8')
        logger.info('created source file', path=str(path))
    return path


def load_sources(path: Path) -> list[Source]:
    '''Read and parse the source file at path.'''
    sources = parse_sources(path.read_text(encoding='utf-8'))
    if sources:
        logger.info('loaded sources', path=str(path), count=len(sources))
    else:
        logger.info('source file was empty or all lines were malformed', path=str(path))
    return sources

'''
Concurrent fetch-and-parse pipeline: one task per source, fanned out on the
event loop and fanned back in once every task has finished.
'''

import asyncio
from collections.abc import Sequence

import structlog

from feedmux.errors import FeedParseError
from feedmux.fetchers import ContentFetcher, create_fetcher
from feedmux.models import Post, Source, TaskResult
from feedmux.parsing import parse_feed_text

logger = structlog.get_logger()

NO_FEEDS_LOG = 'No feeds provided.\n'
SUMMARY_TEMPLATE = 'All feed processing finished. Total posts retrieved: {count}\n'


def _log_prefix(source: Source) -> str:
    return f"Feed '{source.title}' ({source.url}): "


async def process_source(source: Source, fetcher: ContentFetcher) -> TaskResult:
    '''
    Fetch, classify, and extract one source. Every failure mode becomes an
    empty post list plus one log line; nothing is raised.
    '''
    log = logger.bind(title=source.title, url=source.url)
    prefix = _log_prefix(source)

    try:
        fetched = await fetcher.fetch(source.url)
    except Exception as e:
        log.exception('fetcher raised')
        return TaskResult(log=f'Error: {prefix}Fetch FAILED: {e}\n')
    if not fetched.success:
        log.warning('fetch failed', error=fetched.error)
        return TaskResult(log=f'Error: {prefix}Fetch FAILED: {fetched.error}\n')

    try:
        # SAX parsing is CPU-bound; keep it off the event loop
        posts = await asyncio.to_thread(parse_feed_text, fetched.text, source.language)
    except FeedParseError as e:
        log.warning('parse failed', error=str(e))
        return TaskResult(log=f'Error: {prefix}Parse FAILED: {e}\n')
    except Exception as e:
        log.exception('parser raised')
        return TaskResult(log=f'Error: {prefix}Parse FAILED: {e}\n')

    if not posts:
        log.info('feed yielded no posts')
        return TaskResult(log=f'Error: {prefix}Parsed 0 items.\n')

    log.debug('feed parsed', posts=len(posts))
    return TaskResult(posts=posts)


def merge_results(results: Sequence[TaskResult]) -> tuple[list[Post], str]:
    '''
    Concatenate posts in task order. Each task's log fragment is pushed onto
    the front of the aggregate, so fragments appear in reverse task order,
    under a leading summary line.
    '''
    all_posts: list[Post] = []
    fragments: list[str] = []
    for result in results:
        all_posts.extend(result.posts)
        fragments.insert(0, result.log)
    summary = SUMMARY_TEMPLATE.format(count=len(all_posts))
    return all_posts, summary + ''.join(fragments)


async def fetch_and_parse_feeds(
    sources: Sequence[Source],
    fetcher: ContentFetcher | None = None,
) -> tuple[list[Post], str]:
    '''
    Run one process_source task per source concurrently and wait for all of them.

    Args:
        sources: feeds to fetch; duplicates and bad URLs are processed like any other
        fetcher: optional fetcher shared by all tasks; defaults to HttpFetcher

    Returns:
        (all posts, unordered across sources; newline-terminated diagnostic log)
    '''
    if sources is None:
        raise TypeError('sources must be a sequence of Source, not None')
    if not sources:
        logger.info('no feeds provided')
        return [], NO_FEEDS_LOG

    fetcher = fetcher or create_fetcher('http')
    logger.info('processing feeds', count=len(sources))
    results = await asyncio.gather(*(process_source(source, fetcher) for source in sources))
    posts, log_text = merge_results(results)
    logger.info('all feeds processed', posts=len(posts))
    return posts, log_text

'''
Main runner: load sources, run the pipeline under the end-to-end deadline,
order the posts. This is what the CLI calls.
'''

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from feedmux.config import FeedConfig
from feedmux.fetchers import ContentFetcher, create_fetcher
from feedmux.models import Post, Source, sort_posts
from feedmux.pipeline import fetch_and_parse_feeds
from feedmux.sources import init_sources_file, load_sources


@dataclass
class RunReport:
    '''Sorted posts plus the diagnostic log for one run.'''

    posts: list[Post] = field(default_factory=list)
    log: str = ''


async def run_once(
    config: FeedConfig,
    sources: Sequence[Source] | None = None,
    fetcher: ContentFetcher | None = None,
) -> RunReport:
    '''
    One run: load sources (creating the default file when missing unless
    sources are passed), fetch and parse them all, sort newest first.
    The deadline cuts the whole run off; per-source results are then discarded.
    '''
    log = structlog.get_logger()
    if sources is None:
        sources = load_sources(init_sources_file(config.sources_path))
    if not sources:
        return RunReport(log=f'No feed items found in {config.sources_path} or all lines were empty/malformed.\n')

    fetcher = fetcher or create_fetcher(
        'http',
        connect_timeout_ms=config.connect_timeout_ms,
        read_timeout_ms=config.read_timeout_ms,
    )
    header = f'Loaded {len(sources)} feed urls.\n'
    try:
        posts, pipeline_log = await asyncio.wait_for(
            fetch_and_parse_feeds(sources, fetcher), timeout=config.deadline_seconds
        )
    except asyncio.TimeoutError:
        log.error('feed processing timed out', deadline=config.deadline_seconds)
        return RunReport(log=f'Error: Feed processing timed out after {config.deadline_seconds:g}s.\n' + header)

    posts = sort_posts(posts)
    text = pipeline_log + header
    if not posts:
        text = 'No posts found.\n' + text
    log.info('run complete', sources=len(sources), posts=len(posts))
    return RunReport(posts=posts, log=text)

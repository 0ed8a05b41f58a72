'''CLI for fetching Atom/RSS sources concurrently and listing their posts.'''

import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path

import fire
import structlog
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from feedmux.config import FeedConfig
from feedmux.models import Post
from feedmux.runner import run_once
from feedmux.sources import init_sources_file


def _configure_logging(level: str = 'INFO') -> None:
    '''Plain tracebacks, console rendering, events below level dropped.'''
    from structlog.contextvars import merge_contextvars
    from structlog.dev import ConsoleRenderer, plain_traceback, set_exc_info
    from structlog.processors import StackInfoRenderer, TimeStamper, add_log_level

    structlog.configure(
        processors=[
            merge_contextvars,
            add_log_level,
            StackInfoRenderer(),
            set_exc_info,
            TimeStamper(fmt='%Y-%m-%d %H:%M:%S', utc=False),
            ConsoleRenderer(exception_formatter=plain_traceback),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelNamesMapping().get(level.upper(), logging.INFO)),
    )


def _build_config(env_file: str = '.env', sources: str = '', deadline: float = 0, log_level: str = '') -> FeedConfig:
    '''FeedConfig from .env/environment, with optional CLI overrides.'''
    cfg = FeedConfig.from_env(env_file or None)
    if sources:
        cfg.sources_path = Path(sources)
    if deadline:
        cfg.deadline_seconds = float(deadline)
    if log_level:
        cfg.log_level = log_level.upper()
    return cfg


def _format_epoch(epoch: int | None) -> str:
    if epoch is None:
        return '-'
    return datetime.fromtimestamp(epoch, tz=timezone.utc).strftime('%Y-%m-%d %H:%M')


def _posts_table(posts: list[Post], limit: int) -> Table:
    table = Table(show_lines=False)
    table.add_column('Published (UTC)', no_wrap=True)
    table.add_column('Lang', no_wrap=True)
    table.add_column('Title')
    table.add_column('Link', overflow='fold')
    for post in posts[:limit] if limit else posts:
        table.add_row(_format_epoch(post.published_epoch), post.language, post.title, post.link)
    return table


def main() -> None:
    '''feedmux: concurrent Atom/RSS fetch-and-parse.'''
    fire.Fire({
        'run': run,
        'init': init,
    })


def run(
    sources: str = '',
    deadline: float = 0,
    limit: int = 50,
    env_file: str = '.env',
    log_level: str = '',
) -> None:
    '''
    Fetch every source, print posts newest first, then the diagnostic log.
    sources: path to the source list (language,title,url per line). Default from
      FEEDMUX_SOURCES, else feeds.txt; created with defaults if missing.
    deadline: end-to-end cutoff in seconds (default from FEEDMUX_DEADLINE, else 30).
    limit: max posts to print (0 = all).
    env_file: optional .env file with FEEDMUX_* settings.
    log_level: structlog level (default from FEEDMUX_LOG_LEVEL, else INFO).
    '''
    cfg = _build_config(env_file, sources, deadline, log_level)
    _configure_logging(cfg.log_level)
    console = Console()
    report = asyncio.run(run_once(cfg))
    if report.posts:
        console.print(_posts_table(report.posts, limit))
    console.print(Panel(report.log.rstrip('\n') or '(no log)', title='feedmux log'))


def init(sources: str = '', env_file: str = '.env') -> None:
    '''
    Write the default source list if it does not exist yet.
    sources: path to the source list (default from FEEDMUX_SOURCES, else feeds.txt).
    '''
    cfg = _build_config(env_file, sources)
    _configure_logging(cfg.log_level)
    path = init_sources_file(cfg.sources_path)
    Console().print(f'Source list: {path}')

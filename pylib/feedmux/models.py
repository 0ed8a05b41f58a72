'''Records passed through the pipeline.'''

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Source:
    '''One configured feed to fetch.'''

    language: str  # short tag, e.g. 'en'
    title: str
    url: str


@dataclass
class Post:
    '''One normalized entry extracted from a feed.'''

    title: str
    link: str
    language: str  # stamped from the originating Source
    published_epoch: int | None = None  # None when no parseable date was found


@dataclass
class TaskResult:
    '''Outcome of one per-source task: its posts and its log fragment.'''

    posts: list[Post] = field(default_factory=list)
    log: str = ''


def post_sort_key(post: Post) -> tuple[bool, int]:
    '''
    Sort key for newest-first ordering. Posts without an epoch sort after
    every dated post.
    '''
    if post.published_epoch is None:
        return (True, 0)
    return (False, -post.published_epoch)


def sort_posts(posts: Iterable[Post]) -> list[Post]:
    '''Newest first, undated last; ties keep their input order.'''
    return sorted(posts, key=post_sort_key)

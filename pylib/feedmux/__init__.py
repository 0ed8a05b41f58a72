'''feedmux: concurrent fetch-and-parse of Atom and RSS feeds into one post list.'''

from feedmux.models import Post, Source, sort_posts
from feedmux.pipeline import fetch_and_parse_feeds, process_source

__all__ = ['Post', 'Source', 'fetch_and_parse_feeds', 'process_source', 'sort_posts']

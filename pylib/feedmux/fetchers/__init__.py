'''Feed content fetchers: HTTP with charset negotiation. Pluggable fetcher protocol.'''

from feedmux.fetchers.http import charset_from_content_type, decode_body
from feedmux.fetchers.protocol import (
    ContentFetcher,
    FetchResult,
    HttpFetcher,
    create_fetcher,
    fetch_url,
)

__all__ = [
    'ContentFetcher',
    'FetchResult',
    'HttpFetcher',
    'charset_from_content_type',
    'create_fetcher',
    'decode_body',
    'fetch_url',
]

'''
Content fetcher protocol for retrieving feed documents as text.

Provides a pluggable interface so the pipeline can be driven by the real
HTTP fetcher or by a stub transport in tests.
'''

from abc import ABC, abstractmethod
from dataclasses import dataclass

import httpx
import structlog

from feedmux.fetchers.http import charset_from_content_type, decode_body

logger = structlog.get_logger()

DEFAULT_TIMEOUT_MS = 15000


@dataclass
class FetchResult:
    '''Result of fetching a feed URL.'''

    url: str
    text: str = ''
    charset: str | None = None
    success: bool = True
    error: str | None = None


class ContentFetcher(ABC):
    '''Protocol for feed content fetchers.'''

    @abstractmethod
    async def fetch(self, url: str) -> FetchResult:
        '''
        Fetch a URL and return its body as text.

        Args:
            url: URL to fetch

        Returns:
            FetchResult with the decoded text, or success=False and an error
        '''
        pass


def _failure(url: str, error: str) -> FetchResult:
    return FetchResult(url=url, success=False, error=error)


def _is_fetchable(url: str) -> bool:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        return False
    return parsed.scheme in ('http', 'https') and bool(parsed.host)


class HttpFetcher(ContentFetcher):
    '''
    Single-attempt GET using httpx. No retries; a caller that wants them
    wraps this fetcher.
    '''

    def __init__(
        self,
        connect_timeout_ms: int = DEFAULT_TIMEOUT_MS,
        read_timeout_ms: int = DEFAULT_TIMEOUT_MS,
        follow_redirects: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        '''
        connect_timeout_ms, read_timeout_ms: per-request limits in milliseconds.
        transport: optional httpx transport (e.g. httpx.MockTransport in tests).
        '''
        self.timeout = httpx.Timeout(read_timeout_ms / 1000, connect=connect_timeout_ms / 1000)
        self.follow_redirects = follow_redirects
        self.transport = transport

    async def fetch(self, url: str) -> FetchResult:
        '''Fetch URL and decode the body using the negotiated charset.'''
        if not _is_fetchable(url):
            return _failure(url, f'Malformed URL: {url}')
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=self.follow_redirects,
                transport=self.transport,
            ) as client:
                response = await client.get(url)
                if response.status_code != httpx.codes.OK:
                    return _failure(
                        url,
                        f'HTTP Error: {response.status_code} {response.reason_phrase} for URL {url}',
                    )
                charset = charset_from_content_type(response.headers.get('content-type'))
                text = decode_body(response.content, charset)
                logger.debug('fetched feed', url=url, chars=len(text), charset=charset)
                return FetchResult(url=url, text=text, charset=charset)

        except httpx.TimeoutException as e:
            return _failure(url, f'Timed out fetching {url}: {str(e) or type(e).__name__}')
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as e:
            return _failure(url, str(e) or type(e).__name__)
        except Exception as e:
            logger.exception('unexpected fetch error', url=url)
            return _failure(url, str(e) or type(e).__name__)


def create_fetcher(fetcher_type: str = 'http', **kwargs) -> ContentFetcher:
    '''
    Factory function to create a content fetcher.

    Args:
        fetcher_type: 'http' (plain single-attempt GET)
        **kwargs: Additional arguments for the fetcher

    Returns:
        ContentFetcher instance
    '''
    if fetcher_type in ('http', 'simple', 'plain'):
        return HttpFetcher(**kwargs)
    raise ValueError(f'Unknown fetcher type: {fetcher_type}')


async def fetch_url(
    url: str,
    fetcher: ContentFetcher | None = None,
) -> FetchResult:
    '''
    Fetch a URL and return its text. Convenience for one-off use.

    Args:
        url: URL to fetch
        fetcher: Optional fetcher instance; defaults to HttpFetcher

    Returns:
        FetchResult with decoded text
    '''
    f = fetcher or create_fetcher('http')
    return await f.fetch(url)

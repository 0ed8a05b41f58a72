'''Sample documents and a stub fetcher shared by the test modules.'''

import asyncio

from feedmux.fetchers import ContentFetcher, FetchResult

RSS_DOC = '''<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel>
    <title>Channel feed</title>
    <link>http://x/</link>
    <item>
      <title>Hello</title>
      <link>http://x/1</link>
      <pubDate>Mon, 01 Jan 2024 00:00:00 GMT</pubDate>
    </item>
    <item>
      <title>  Spaced  </title>
      <link>
        http://x/2
      </link>
      <dc:date>2024-01-02T00:00:00Z</dc:date>
    </item>
    <item>
      <title></title>
      <link>http://x/3</link>
    </item>
    <item>
      <title>No link</title>
    </item>
    <item>
      <title>Bad date</title>
      <link>http://x/5</link>
      <pubDate>someday</pubDate>
    </item>
  </channel>
</rss>
'''

ATOM_DOC = '''<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Example Feed</title>
  <link href="http://example.org/"/>
  <updated>2024-03-01T00:00:00Z</updated>
  <entry>
    <title>Atom One</title>
    <link rel="self" href="http://example.org/self/1"/>
    <link rel="alternate" href="http://example.org/1"/>
    <published>2024-01-01T00:00:00Z</published>
    <updated>2024-02-01T00:00:00Z</updated>
  </entry>
  <entry>
    <title type="html">Atom &amp; Two</title>
    <link href="http://example.org/2"/>
    <updated>2024-01-02T00:00:00+00:00</updated>
  </entry>
  <entry>
    <title>No link entry</title>
  </entry>
</feed>
'''

EMPTY_RSS_DOC = '''<?xml version="1.0"?>
<rss version="2.0"><channel><title>Nothing here</title></channel></rss>
'''

SCENARIO_RSS_DOC = (
    '<rss version="2.0"><channel><title>Example</title>'
    '<item><title>Hello</title><link>http://x/1</link>'
    '<pubDate>Mon, 01 Jan 2024 00:00:00 GMT</pubDate></item>'
    '</channel></rss>'
)

EPOCH_2024_01_01 = 1704067200
EPOCH_2024_01_02 = 1704153600


class StubFetcher(ContentFetcher):
    '''Serves canned text per URL; unknown URLs fail like an unreachable host.'''

    def __init__(self, pages: dict[str, str] | None = None, delay: float = 0):
        self.pages = pages or {}
        self.delay = delay
        self.calls: list[str] = []

    async def fetch(self, url: str) -> FetchResult:
        self.calls.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        if url in self.pages:
            return FetchResult(url=url, text=self.pages[url], charset='utf-8')
        return FetchResult(url=url, success=False, error=f'[Errno -2] Name or service not known: {url}')

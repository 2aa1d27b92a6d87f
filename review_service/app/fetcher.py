from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote_plus
from curl_cffi.requests import AsyncSession, RequestsError
from . import config
from .errors import TransportError

# No hardcoded User-Agent: impersonate="chrome" sends the one that matches
# Chrome's TLS fingerprint.
EXTRA_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Upgrade-Insecure-Requests": "1",
    "Referer": "https://www.google.com/",
}


@dataclass
class FetchResponse:
    body: str
    status_code: int = 200
    url: str = ""


class Fetcher(Protocol):
    async def fetch(self, url: str) -> FetchResponse: ...


class CurlFetcher:
    """
    Fetches review pages with Chrome TLS impersonation.
    With a Crawlbase token every page goes through the Crawling API instead,
    which renders and proxies the request for us.
    """

    def __init__(self, token: str | None = None, timeout: float | None = None):
        self.token = config.CRAWLBASE_TOKEN if token is None else token
        self.timeout = config.FETCH_TIMEOUT_SECONDS if timeout is None else timeout
        self._session: AsyncSession | None = None

    async def __aenter__(self) -> "CurlFetcher":
        self._session = AsyncSession(
            impersonate="chrome", headers=EXTRA_HEADERS, timeout=self.timeout, allow_redirects=True
        )
        return self

    async def __aexit__(self, *exc) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    def request_url(self, url: str) -> str:
        if not self.token:
            return url
        return f"{config.CRAWLBASE_URL}?token={quote_plus(self.token)}&url={quote_plus(url)}"

    async def fetch(self, url: str) -> FetchResponse:
        if self._session is None:
            raise RuntimeError("CurlFetcher must be used as 'async with CurlFetcher() as fetcher'")
        try:
            resp = await self._session.get(self.request_url(url))
        except RequestsError as e:
            raise TransportError(f"Network error on {url}: {e}", url=url) from e

        if resp.status_code != 200:
            raise TransportError(f"HTTP {resp.status_code} on {url}", url=url, status_code=resp.status_code)
        return FetchResponse(body=resp.text, status_code=resp.status_code, url=url)

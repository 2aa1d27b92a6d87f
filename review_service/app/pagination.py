"""
Pagination driver.
Walks page 1, 2, 3... of a review listing one page at a time:
fetch -> parse -> continue / retry / stop. Empty pages and transport errors are
retried within the retry budget; a page that cannot be parsed stops the run but
everything collected so far is kept.
"""
import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional
from . import config
from .errors import ExtractionError, TransportError
from .fetcher import Fetcher
from .models import ProductSummary, RawReview
from .scrapers.base import PageExtraction, ReviewScraper

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    delay: float = 5.0


@dataclass(frozen=True)
class PaginationPolicy:
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    page_delay: float = 30.0          # politeness delay before every page after the first
    max_pages: Optional[int] = 100    # None = follow "Next" for as long as it shows up

    @classmethod
    def from_config(cls) -> "PaginationPolicy":
        return cls(
            retry=RetryPolicy(max_attempts=max(config.RETRY_ATTEMPTS, 1), delay=config.RETRY_DELAY_SECONDS),
            page_delay=config.PAGE_DELAY_SECONDS,
            max_pages=config.MAX_PAGES or None,
        )


@dataclass
class CrawlResult:
    product: ProductSummary = field(default_factory=ProductSummary)
    reviews: list[RawReview] = field(default_factory=list)
    pages_scraped: int = 0
    fetch_count: int = 0
    partial: bool = False
    error: Optional[str] = None


class PageFailed(Exception):
    """Internal: a page could not be fetched within the retry budget."""


def page_url(base_url: str, page: int) -> str:
    if page == 1:
        return base_url
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}page={page}"


class PaginationDriver:
    def __init__(
        self,
        fetcher: Fetcher,
        scraper: ReviewScraper,
        policy: PaginationPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.fetcher = fetcher
        self.scraper = scraper
        self.policy = policy or PaginationPolicy()
        self.sleep = sleep
        self.fetch_count = 0

    async def _fetch_page(self, url: str, page: int) -> PageExtraction:
        """Fetch + parse one page, retrying empty pages and transport errors."""
        retry = self.policy.retry
        attempts = max(retry.max_attempts, 1)
        accepted: PageExtraction | None = None
        last_error: TransportError | None = None

        for attempt in range(1, attempts + 1):
            try:
                self.fetch_count += 1
                resp = await self.fetcher.fetch(url)
            except TransportError as e:
                last_error = e
                print(f"[Pagination] Page {page} attempt {attempt}/{attempts} failed: {e}")
            else:
                # ExtractionError is not retried: the page is not HTML at all
                accepted = self.scraper.extract(resp.body)
                if accepted.reviews:
                    return accepted
                print(f"[Pagination] Page {page} attempt {attempt}/{attempts} returned 0 reviews")

            if attempt < attempts:
                await self.sleep(retry.delay)

        if accepted is None:
            raise PageFailed(f"page {page} failed after {attempts} attempts: {last_error}")
        print(f"[Pagination] Accepting page {page} as empty")
        return accepted

    async def run(self, base_url: str) -> CrawlResult:
        result = CrawlResult()
        page = 1
        print(f"[Pagination] Starting to scrape {base_url} ({self.scraper.name})")

        while True:
            url = page_url(base_url, page)
            print(f"[Pagination] Scraping page {page}: {url}")
            try:
                extraction = await self._fetch_page(url, page)
            except ExtractionError as e:
                print(f"[Pagination] Error parsing page {page}: {e}")
                result.partial, result.error = True, str(e)
                break
            except PageFailed as e:
                print(f"[Pagination] Failed to scrape page {page}: {e}")
                result.partial, result.error = True, str(e)
                break

            if page == 1:
                result.product = extraction.product
            result.reviews.extend(extraction.reviews)
            result.pages_scraped = page
            print(f"[Pagination] Found {len(extraction.reviews)} reviews on page {page}")

            if not extraction.has_more:
                break
            if self.policy.max_pages is not None and page >= self.policy.max_pages:
                print(f"[Pagination] Stopping at page ceiling ({self.policy.max_pages}) with more pages left")
                break

            await self.sleep(self.policy.page_delay)
            page += 1

        result.fetch_count = self.fetch_count
        print(f"[Pagination] Done: {len(result.reviews)} reviews from {result.pages_scraped} pages")
        return result

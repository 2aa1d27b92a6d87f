"""
pipeline.py — one scrape run.
Validates the input, picks the site scraper from the URL, walks the pages,
filters by date and writes the artifact. Input problems fail before any fetch;
a run that stops halfway still saves what it collected.
"""
import asyncio
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from .dates import parse_input_date, today_utc
from .errors import InputValidationError
from .fetcher import Fetcher
from .filtering import aggregate
from .models import DateRange, ScrapeRequest, ScrapeResult
from .pagination import PaginationDriver, PaginationPolicy, Sleep
from .scrapers.base import ReviewScraper
from .scrapers.registry import select_scraper
from .storage import save_result


@dataclass
class ValidatedRun:
    url: str
    date_range: DateRange
    scraper: ReviewScraper


def validate_request(req: ScrapeRequest) -> ValidatedRun:
    missing = [name for name in ("url", "start_date", "end_date") if not getattr(req, name, "").strip()]
    if missing:
        raise InputValidationError(f"Input must include 'url', 'start_date' and 'end_date' (missing: {', '.join(missing)})")

    try:
        start = parse_input_date(req.start_date.strip())
        end = parse_input_date(req.end_date.strip())
    except ValueError as e:
        raise InputValidationError(f"Dates must be in YYYY-MM-DD format: {e}") from e

    url = req.url.strip()
    return ValidatedRun(url=url, date_range=DateRange(start=start, end=end), scraper=select_scraper(url))


async def scrape_reviews(
    req: ScrapeRequest,
    fetcher: Fetcher,
    policy: PaginationPolicy | None = None,
    reference: date | None = None,
    sleep: Sleep = asyncio.sleep,
) -> ScrapeResult:
    run = validate_request(req)
    print(f"[Pipeline] {run.scraper.name} run for {run.url}, reviews between {run.date_range.start} and {run.date_range.end}")

    driver = PaginationDriver(fetcher, run.scraper, policy or PaginationPolicy.from_config(), sleep=sleep)
    crawl = await driver.run(run.url)
    if crawl.partial:
        print(f"[Pipeline] Run stopped early, keeping {len(crawl.reviews)} reviews: {crawl.error}")

    return aggregate(crawl, run.date_range, reference or today_utc())


async def run_job(
    req: ScrapeRequest,
    fetcher: Fetcher,
    policy: PaginationPolicy | None = None,
    output_dir: Path | str | None = None,
    reference: date | None = None,
    sleep: Sleep = asyncio.sleep,
) -> tuple[ScrapeResult, Path]:
    result = await scrape_reviews(req, fetcher, policy=policy, reference=reference, sleep=sleep)
    path = save_result(result, output_dir)
    print(
        f"[Pipeline] Complete. Product: {result.product.name!r} | "
        f"Total (from site): {result.product.review_count_label!r} | "
        f"Scraped after filtering: {result.total_reviews_filtered}"
    )
    return result, path

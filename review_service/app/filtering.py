from datetime import date
from .dates import today_utc, try_normalize
from .models import DateRange, RawReview, ScrapeResult
from .pagination import CrawlResult


def filter_reviews(reviews: list[RawReview], date_range: DateRange, reference: date | None = None) -> list[RawReview]:
    """
    Keeps reviews whose date normalizes and falls inside the inclusive range.
    Order is preserved; unparseable dates are dropped silently.
    """
    if reference is None:
        reference = today_utc()
    kept = []
    for review in reviews:
        day = try_normalize(review.raw_date, reference)
        if day is not None and date_range.contains(day):
            kept.append(review)
    return kept


def aggregate(crawl: CrawlResult, date_range: DateRange, reference: date | None = None) -> ScrapeResult:
    """Builds the run result. The displayed total is the site's own label, never the card count."""
    kept = filter_reviews(crawl.reviews, date_range, reference)
    dropped = len(crawl.reviews) - len(kept)
    print(f"[Filter] {len(kept)} reviews match {date_range.start}..{date_range.end} ({dropped} dropped)")
    return ScrapeResult(
        product=crawl.product,
        reviews=kept,
        total_reviews_filtered=len(kept),
        total_reviews_extracted=len(crawl.reviews),
        pages_scraped=crawl.pages_scraped,
        partial=crawl.partial,
        error=crawl.error,
    )

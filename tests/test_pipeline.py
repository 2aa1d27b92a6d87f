"""End-to-end runs through validation, pagination, filtering and persistence."""

import asyncio
import json
from datetime import date

import pytest

from review_service.app.errors import InputValidationError
from review_service.app.models import ScrapeRequest
from review_service.app.pagination import PaginationPolicy, RetryPolicy
from review_service.app.pipeline import run_job, scrape_reviews, validate_request

CAPTERRA_URL = "https://www.capterra.com/p/123456/acme-crm/reviews/"
G2_URL = "https://www.g2.com/products/acme-crm/reviews"
REFERENCE = date(2024, 7, 1)
FAST = PaginationPolicy(retry=RetryPolicy(max_attempts=3, delay=0), page_delay=0, max_pages=None)


def _request(url=CAPTERRA_URL, start="2024-01-01", end="2024-06-30"):
    return ScrapeRequest(url=url, start_date=start, end_date=end)


def test_capterra_single_page_end_to_end(stub_fetcher, capterra_page, fake_sleep):
    page = capterra_page(["2 months ago", "8 months ago", "2 years ago", "Mar 3, 2023", ""])
    fetcher = stub_fetcher([page])

    result = asyncio.run(scrape_reviews(_request(), fetcher, policy=FAST, reference=REFERENCE, sleep=fake_sleep))

    assert fetcher.calls == [CAPTERRA_URL]
    assert result.total_reviews_filtered == 1
    assert result.total_reviews_extracted == 5
    assert [r.raw_date for r in result.reviews] == ["2 months ago"]
    assert result.product.name == "Acme CRM Reviews"
    assert result.product.review_count_label == "5"


def test_g2_multi_page_end_to_end(stub_fetcher, g2_page, fake_sleep):
    fetcher = stub_fetcher([
        g2_page(2, has_next=True, date="Jun 30, 2024"),
        g2_page(2, has_next=True, date="2024/1/1"),
        g2_page(2, date="12/31/2023"),
    ])
    result = asyncio.run(scrape_reviews(_request(url=G2_URL), fetcher, policy=FAST, reference=REFERENCE, sleep=fake_sleep))

    assert len(fetcher.calls) == 3
    assert result.total_reviews_extracted == 6
    assert result.total_reviews_filtered == 4
    assert result.pages_scraped == 3
    assert result.product.review_count_label == "1,024 reviews"


def test_unsupported_domain_fails_before_fetching(stub_fetcher):
    fetcher = stub_fetcher([])
    with pytest.raises(InputValidationError):
        asyncio.run(scrape_reviews(_request(url="https://www.trustpilot.com/review/acme.com"), fetcher, policy=FAST))
    assert fetcher.calls == []


@pytest.mark.parametrize("req", [
    ScrapeRequest(url="", start_date="2024-01-01", end_date="2024-06-30"),
    ScrapeRequest(url=CAPTERRA_URL, start_date="", end_date="2024-06-30"),
    ScrapeRequest(url=CAPTERRA_URL, start_date="2024-01-01"),
    ScrapeRequest(url=CAPTERRA_URL, start_date="01/01/2024", end_date="2024-06-30"),
    ScrapeRequest(url=CAPTERRA_URL, start_date="2024-01-01", end_date="2024-02-31"),
])
def test_invalid_input_is_rejected(req):
    with pytest.raises(InputValidationError):
        validate_request(req)


def test_validate_request_picks_variant_and_range():
    run = validate_request(_request(url=G2_URL))
    assert run.scraper.name == "G2"
    assert run.date_range.start == date(2024, 1, 1)
    assert run.date_range.end == date(2024, 6, 30)


def test_run_job_persists_partial_result(tmp_path, stub_fetcher, g2_page, fake_sleep):
    fetcher = stub_fetcher([g2_page(2, has_next=True, date="Mar 3, 2024"), "upstream timeout, try again"])
    result, path = asyncio.run(run_job(
        _request(url=G2_URL), fetcher, policy=FAST, output_dir=tmp_path, reference=REFERENCE, sleep=fake_sleep,
    ))

    assert result.partial is True
    assert path.exists()
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["partial"] is True
    assert data["totalScrapedReviews"] == 2
    assert data["productName"] == "Acme CRM"


def test_run_job_saves_artifact_when_a_date_cannot_be_placed(tmp_path, stub_fetcher, g2_page, fake_sleep):
    fetcher = stub_fetcher([g2_page(2, date="3000 years ago")])
    result, path = asyncio.run(run_job(
        _request(url=G2_URL), fetcher, policy=FAST, output_dir=tmp_path, reference=REFERENCE, sleep=fake_sleep,
    ))

    assert result.total_reviews_extracted == 2
    assert result.total_reviews_filtered == 0
    assert path.exists()

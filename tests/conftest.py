import pytest
from review_service.app.fetcher import FetchResponse


class StubFetcher:
    """Replays canned bodies (or raises canned exceptions) and records every URL."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    async def fetch(self, url: str) -> FetchResponse:
        self.calls.append(url)
        if not self.responses:
            raise AssertionError(f"unexpected fetch of {url}")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return FetchResponse(body=item, url=url)


def _g2_card(i: int, date: str) -> str:
    return f"""
    <div class="paper">
      <span itemprop="author">Reviewer {i}</span>
      <div class="mt-4th">Engineer</div>
      <meta itemprop="ratingValue" content="4.5">
      <span class="x-current-review-date">{date}</span>
      <a class="pjax" href="/survey_responses/review-{i}">Review {i}</a>
    </div>"""


def _g2_page(count: int, has_next: bool = False, name: str = "Acme CRM", date: str = "Jan 30, 2024") -> str:
    cards = "".join(_g2_card(i, date) for i in range(count))
    pagination = '<div class="pagination"><a href="?page=2">2</a><a href="?page=2">Next ›</a></div>' if has_next \
        else '<div class="pagination"><a href="?page=1">1</a></div>'
    return f"""<html><body>
    <div class="product-head__title"><a class="c-midnight-100" href="/products/acme">{name}</a></div>
    <div id="products-dropdown"><span class="fw-semibold">4.5</span></div>
    <div class="filters-product"><h3>1,024 reviews</h3></div>
    <div class="nested-ajax-loading">{cards}</div>
    {pagination}
    </body></html>"""


def _capterra_card(name: str, date: str, comment: str = "Great tool for teams.") -> str:
    return f"""
    <div class="review-card">
      <div class="row">
        <div class="col ps-0">
          <div class="fw-bold">{name}</div>
          <div class="text-ash">Marketing Manager</div>
        </div>
        <div class="col">
          <div class="text-ash"><span class="ms-1">5.0</span><span class="ms-2">{date}</span></div>
          <p><span>Comments:</span> <span>{comment}</span></p>
          <p><strong>Pros:</strong></p>
          <p>Easy setup</p>
          <p><strong>Cons:</strong></p>
          <p>Pricey</p>
        </div>
      </div>
    </div>"""


def _capterra_page(dates: list[str], review_count_label: str = "") -> str:
    cards = "".join(_capterra_card(f"Reviewer {i}", d) for i, d in enumerate(dates))
    count = f'<a href="#reviews">{review_count_label}</a>' if review_count_label else ""
    return f"""<html><body>
    <div id="productHeader"><div class="container"><div id="productHeaderInfo"><div class="col">
      <h1 class="mb-1">Acme CRM Reviews</h1>
      <div class="align-items-center d-flex"><span class="star-rating-component"><span class="d-flex"><span class="ms-1">4.6</span></span></span></div>
      {count}
    </div></div></div></div>
    <div id="reviews">{cards}</div>
    </body></html>"""


@pytest.fixture
def stub_fetcher():
    return StubFetcher


@pytest.fixture
def g2_page():
    return _g2_page


@pytest.fixture
def capterra_page():
    return _capterra_page


@pytest.fixture
def capterra_card():
    return _capterra_card


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def fake_sleep(sleeps):
    async def _sleep(seconds: float) -> None:
        sleeps.append(seconds)
    return _sleep

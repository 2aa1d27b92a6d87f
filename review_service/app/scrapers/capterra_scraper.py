from bs4 import BeautifulSoup, Tag
from .base import ReviewScraper, Selector, first_text, labeled_inline, labeled_sibling
from ..models import ProductSummary, RawReview

HEADER = "div#productHeader > div.container > div#productHeaderInfo > div.col"


class CapterraScraper(ReviewScraper):
    name = "Capterra"
    domain_keyword = "capterra"

    # Two card layouts: the plain list and the translated-review wrapper
    card_selector = "#reviews > div.review-card, div.i18n-translation_container.review-card"
    pagination_selectors = ("nav[aria-label*='agination']", "ul.pagination", ".pagination")

    product_name = (
        Selector(f"{HEADER} > h1.mb-1"),
        Selector("#productHeaderInfo h1"),
        Selector("h1"),
    )
    product_rating = (
        Selector(f"{HEADER} > div.align-items-center.d-flex > span.star-rating-component > span.d-flex > span.ms-1"),
        Selector("#productHeaderInfo span.star-rating-component span.ms-1"),
    )
    product_review_count = (
        Selector("#productHeaderInfo [data-testid='review-count']"),
        Selector("#productHeaderInfo a[href='#reviews']"),
    )

    reviewer_name = (
        Selector("div.ps-0 > div.fw-bold"),
        Selector("div.col > div.h5.fw-bold"),
    )
    profile_title = (
        Selector("div.ps-0 > div.text-ash"),
        Selector("div.col > div.text-ash"),
    )
    rating = (
        Selector("div.text-ash > span.ms-1"),
        Selector("span.star-rating-component span.ms-1"),
    )
    review_date = (
        Selector("div.text-ash > span.ms-2"),
        Selector("span.ms-2"),
    )

    def parse_product(self, soup: BeautifulSoup, reviews: list[RawReview]) -> ProductSummary:
        product = super().parse_product(soup, reviews)
        if product.review_count_label:
            return product
        # No displayed total on the page: report the cards we could see
        return product.model_copy(update={"review_count_label": str(len(reviews))})

    def parse_card(self, card: Tag) -> RawReview:
        return RawReview(
            reviewer_name=first_text(card, self.reviewer_name),
            profile_title=first_text(card, self.profile_title),
            rating_label=first_text(card, self.rating),
            raw_date=first_text(card, self.review_date),
            body_text=labeled_inline(card, "Comments:"),
            pros=labeled_sibling(card, "p", "Pros:"),
            cons=labeled_sibling(card, "p", "Cons:"),
            permalink="",
        )

from bs4 import Tag
from .base import ReviewScraper, Selector, first_text, labeled_sibling
from ..models import RawReview


class G2Scraper(ReviewScraper):
    name = "G2"
    domain_keyword = "g2"

    card_selector = ".nested-ajax-loading > div.paper, article[itemprop='review']"
    pagination_selectors = (".pagination", "nav[aria-label*='agination']")

    product_name = (
        Selector("div.product-head__title a.c-midnight-100"),
        Selector("div.product-head__title [itemprop='name']"),
        Selector("h1[itemprop='name']"),
    )
    product_rating = (
        Selector("#products-dropdown .fw-semibold"),
        Selector("[itemprop='aggregateRating'] [itemprop='ratingValue']", attr="content"),
    )
    product_review_count = (
        Selector(".filters-product h3"),
        Selector("[itemprop='aggregateRating'] [itemprop='reviewCount']", attr="content"),
    )

    reviewer_name = (
        Selector("[itemprop='author'] [itemprop='name']", attr="content"),
        Selector("[itemprop='author']"),
        Selector(".link--header-color"),
    )
    profile_title = (
        Selector(".mt-4th", join=True),
        Selector("[data-testid='reviewer-title']"),
    )
    rating = (
        Selector("[itemprop='ratingValue']", attr="content"),
        Selector("[data-testid='review-rating']"),
    )
    review_date = (
        Selector(".x-current-review-date"),
        Selector("[itemprop='datePublished']", attr="content"),
        Selector("time"),
    )
    body = (
        Selector("[itemprop='reviewBody']"),
        Selector("[data-testid='review-content']"),
        Selector(".pjax"),
    )
    permalink = (
        Selector(".pjax", attr="href"),
        Selector("a[href*='/reviews/']", attr="href"),
    )

    def parse_card(self, card: Tag) -> RawReview:
        # Newer cards answer two fixed questions instead of free pros/cons blocks
        pros = labeled_sibling(card, "div", "What do you like best") or labeled_sibling(card, "h5", "like best")
        cons = labeled_sibling(card, "div", "What do you dislike") or labeled_sibling(card, "h5", "dislike")
        return RawReview(
            reviewer_name=first_text(card, self.reviewer_name),
            profile_title=first_text(card, self.profile_title),
            rating_label=first_text(card, self.rating),
            raw_date=first_text(card, self.review_date),
            body_text=first_text(card, self.body),
            pros=pros,
            cons=cons,
            permalink=first_text(card, self.permalink),
        )

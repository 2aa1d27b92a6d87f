"""
Shared extraction machinery for the per-site scrapers.
Every field is read through an ordered chain of selectors so that both the old
and the new layout of a site keep working; a field nobody can find is "".
"""
import re
from dataclasses import dataclass, field
from typing import NamedTuple
from bs4 import BeautifulSoup, Tag
from ..errors import ExtractionError
from ..models import ProductSummary, RawReview


INLINE_TAGS = {"strong", "b", "em", "i", "u", "span", "a", "small", "label"}


class Selector(NamedTuple):
    css: str
    attr: str | None = None   # read this attribute instead of the text
    join: bool = False        # join the text of every match instead of the first


@dataclass
class PageExtraction:
    product: ProductSummary
    reviews: list[RawReview] = field(default_factory=list)
    has_more: bool = False


def _clean(text: str | None) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def first_text(root: Tag, chain: tuple[Selector, ...]) -> str:
    """Value of the first selector in the chain that yields non-empty text."""
    for sel in chain:
        if sel.join:
            value = _clean(" ".join(el.get_text(" ", strip=True) for el in root.select(sel.css)))
        else:
            el = root.select_one(sel.css)
            if el is None:
                continue
            raw = el.get(sel.attr) if sel.attr else el.get_text(" ", strip=True)
            # Multi-valued attributes (class, rel) come back as lists
            value = _clean(" ".join(raw) if isinstance(raw, list) else raw)
        if value:
            return value
    return ""


def _label_anchor(root: Tag, tag_name: str, label: str) -> Tag | None:
    """
    The <tag_name> that directly holds the label text, allowing only inline
    wrappers (<p><strong>Pros:</strong></p>) in between.
    """
    label = label.lower()
    for text in root.find_all(string=True):
        if label not in text.lower():
            continue
        anchor = text.parent
        while anchor is not None and anchor is not root and anchor.name != tag_name:
            if anchor.name not in INLINE_TAGS:
                anchor = None
                break
            anchor = anchor.parent
        if anchor is not None and anchor is not root:
            return anchor
    return None


def labeled_sibling(root: Tag, tag_name: str, label: str) -> str:
    """Text of the element right after the labeled <tag_name>."""
    anchor = _label_anchor(root, tag_name, label)
    if anchor is None:
        return ""
    sibling = anchor.find_next_sibling()
    return _clean(sibling.get_text(" ", strip=True)) if sibling else ""


def labeled_inline(root: Tag, label: str) -> str:
    """Text of the spans sharing a block with the labeled span."""
    anchor = _label_anchor(root, "span", label)
    if anchor is None or anchor.parent is None:
        return ""
    parts = [
        s.get_text(" ", strip=True)
        for s in anchor.parent.find_all("span", recursive=False)
        if s is not anchor and label.lower() not in s.get_text(strip=True).lower()
    ]
    return _clean(" ".join(parts))


class ReviewScraper:
    """One source layout: knows its selectors, never does I/O."""

    name = ""
    domain_keyword = ""

    card_selector = ""
    pagination_selectors: tuple[str, ...] = (".pagination",)

    product_name: tuple[Selector, ...] = ()
    product_rating: tuple[Selector, ...] = ()
    product_review_count: tuple[Selector, ...] = ()

    def matches(self, url: str) -> bool:
        return self.domain_keyword in url.lower()

    def parse_document(self, markup) -> BeautifulSoup:
        if isinstance(markup, bytes):
            markup = markup.decode("utf-8", errors="replace")
        if not isinstance(markup, str):
            raise ExtractionError(f"{self.name}: expected page markup, got {type(markup).__name__}")
        try:
            soup = BeautifulSoup(markup, "html.parser")
        except Exception as e:
            raise ExtractionError(f"{self.name}: markup could not be parsed: {e}") from e
        # Blank bodies are empty pages; non-blank text without a single tag is not HTML
        if markup.strip() and soup.find() is None:
            raise ExtractionError(f"{self.name}: markup contains no HTML elements")
        return soup

    def extract(self, markup) -> PageExtraction:
        soup = self.parse_document(markup)
        reviews = [self.parse_card(card) for card in soup.select(self.card_selector)]
        return PageExtraction(
            product=self.parse_product(soup, reviews),
            reviews=reviews,
            has_more=self.has_next_page(soup),
        )

    def parse_product(self, soup: BeautifulSoup, reviews: list[RawReview]) -> ProductSummary:
        return ProductSummary(
            name=first_text(soup, self.product_name),
            rating_label=first_text(soup, self.product_rating),
            review_count_label=first_text(soup, self.product_review_count),
        )

    def parse_card(self, card: Tag) -> RawReview:
        raise NotImplementedError

    def has_next_page(self, soup: BeautifulSoup) -> bool:
        for css in self.pagination_selectors:
            for region in soup.select(css):
                if region.select_one("[rel~=next]") is not None:
                    return True
                if "next" in region.get_text(" ", strip=True).lower():
                    return True
        return False

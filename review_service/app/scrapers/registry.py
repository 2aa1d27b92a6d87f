from .base import ReviewScraper
from .capterra_scraper import CapterraScraper
from .g2_scraper import G2Scraper
from ..errors import InputValidationError

# Capterra first: "g2" is a short keyword that can show up inside other URLs
SCRAPERS: list[ReviewScraper] = [CapterraScraper(), G2Scraper()]


def select_scraper(url: str) -> ReviewScraper:
    """Picks the site variant for a URL once, before any fetch happens."""
    for scraper in SCRAPERS:
        if scraper.matches(url):
            return scraper
    supported = ", ".join(s.name for s in SCRAPERS)
    raise InputValidationError(f"Unsupported URL {url!r}. Supported sites: {supported}")

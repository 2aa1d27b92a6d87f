class ScraperError(Exception):
    """Base class for every error raised by the review scraper."""


class InputValidationError(ScraperError):
    """Run input is missing fields, has malformed dates or an unsupported URL."""


class ExtractionError(ScraperError):
    """Markup could not be parsed as an HTML document at all."""


class TransportError(ScraperError):
    """The fetch collaborator could not return a page body."""

    def __init__(self, message: str, url: str = "", status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class NormalizationError(ScraperError):
    """A raw review date matched none of the known encodings."""

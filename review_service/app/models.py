from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ProductSummary(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field("", alias="productName")
    rating_label: str = Field("", alias="stars")              # raw, e.g. "4.5"
    review_count_label: str = Field("", alias="totalReviews")  # as displayed by the site


class RawReview(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reviewer_name: str = Field("", alias="reviewerName")
    profile_title: str = Field("", alias="profileTitle")
    rating_label: str = Field("", alias="stars")
    raw_date: str = Field("", alias="reviewDate")   # relative phrase or absolute, unparsed
    body_text: str = Field("", alias="reviewText")
    pros: str = ""
    cons: str = ""
    permalink: str = Field("", alias="reviewLink")


class DateRange(BaseModel):
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


class ScrapeRequest(BaseModel):
    url: str = ""
    start_date: str = ""   # YYYY-MM-DD
    end_date: str = ""     # YYYY-MM-DD


class ScrapeResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product: ProductSummary = Field(default_factory=ProductSummary)
    reviews: list[RawReview] = Field(default_factory=list)
    total_reviews_filtered: int = 0
    total_reviews_extracted: int = 0
    pages_scraped: int = 0
    partial: bool = False
    error: Optional[str] = None

    def to_output(self) -> dict:
        """Flat camelCase document written to disk and returned over HTTP."""
        return {
            "productName": self.product.name,
            "stars": self.product.rating_label,
            "totalReviews": self.product.review_count_label,
            "totalScrapedReviews": self.total_reviews_filtered,
            "totalExtractedReviews": self.total_reviews_extracted,
            "pagesScraped": self.pages_scraped,
            "partial": self.partial,
            "error": self.error,
            "allReviews": [r.model_dump(by_alias=True) for r in self.reviews],
        }


class ScrapeResponse(BaseModel):
    productName: str
    stars: str
    totalReviews: str
    totalScrapedReviews: int
    totalExtractedReviews: int
    pagesScraped: int
    partial: bool
    error: Optional[str] = None
    allReviews: list[dict]
    output_file: str

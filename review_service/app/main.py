from typing import AsyncIterator
from fastapi import Depends, FastAPI, HTTPException
from .errors import InputValidationError
from .fetcher import CurlFetcher, Fetcher
from .models import ScrapeRequest, ScrapeResponse
from .pagination import PaginationPolicy
from .pipeline import run_job

app = FastAPI(title="Review Scraper Service")


async def get_fetcher() -> AsyncIterator[Fetcher]:
    # One session per request so concurrent runs never share transport state
    async with CurlFetcher() as fetcher:
        yield fetcher


def get_policy() -> PaginationPolicy:
    return PaginationPolicy.from_config()


@app.post("/scrape", response_model=ScrapeResponse)
async def scrape(
    req: ScrapeRequest,
    fetcher: Fetcher = Depends(get_fetcher),
    policy: PaginationPolicy = Depends(get_policy),
):
    print(f"[Scraper] Starting run for: {req.url}")
    try:
        result, path = await run_job(req, fetcher, policy=policy)
    except InputValidationError as e:
        print(f"[Scraper] Rejected input: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return ScrapeResponse(**result.to_output(), output_file=str(path))


@app.get("/health")
def health():
    return {"status": "ok"}

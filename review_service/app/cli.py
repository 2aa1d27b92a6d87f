"""
Command line entry point.

  review-scraper                       # reads ./input.json
  review-scraper --input my_run.json
  review-scraper --url https://www.g2.com/products/acme/reviews \\
                 --start-date 2024-01-01 --end-date 2024-06-30
"""
import argparse
import asyncio
import json
import sys
from pathlib import Path
from . import config
from .errors import InputValidationError
from .fetcher import CurlFetcher
from .models import ScrapeRequest
from .pagination import PaginationPolicy
from .pipeline import run_job


def load_request(args: argparse.Namespace) -> ScrapeRequest:
    if args.url:
        return ScrapeRequest(url=args.url, start_date=args.start_date or "", end_date=args.end_date or "")

    input_path = Path(args.input)
    if not input_path.exists():
        raise InputValidationError(f"Input file not found: {input_path}")
    try:
        data = json.loads(input_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InputValidationError(f"Input file is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise InputValidationError("Input file must contain a JSON object")
    return ScrapeRequest(
        url=str(data.get("url") or ""),
        start_date=str(data.get("start_date") or ""),
        end_date=str(data.get("end_date") or ""),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scrape G2 / Capterra reviews within a date range",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--input", default="input.json", help="JSON file with url, start_date, end_date (default: input.json)")
    parser.add_argument("--url", help="Review listing URL (overrides --input)")
    parser.add_argument("--start-date", help="Start date (YYYY-MM-DD)")
    parser.add_argument("--end-date", help="End date (YYYY-MM-DD)")
    parser.add_argument("--output-dir", default=str(config.OUTPUT_DIR), help=f"Artifact directory (default: {config.OUTPUT_DIR})")
    parser.add_argument("--max-pages", type=int, default=config.MAX_PAGES, help="Page ceiling, 0 for none")
    return parser


async def _run(req: ScrapeRequest, policy: PaginationPolicy, output_dir: str):
    async with CurlFetcher() as fetcher:
        return await run_job(req, fetcher, policy=policy, output_dir=output_dir)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    base = PaginationPolicy.from_config()
    policy = PaginationPolicy(retry=base.retry, page_delay=base.page_delay, max_pages=args.max_pages or None)

    try:
        req = load_request(args)
        result, path = asyncio.run(_run(req, policy, args.output_dir))
    except InputValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nScraping interrupted", file=sys.stderr)
        return 1

    print("Scraping complete." if not result.partial else f"Scraping stopped early: {result.error}")
    print("Product Name:", result.product.name)
    print("Total Reviews (from the website):", result.product.review_count_label)
    print("Scraped Reviews Count (after filtering):", result.total_reviews_filtered)
    print("Output file saved to:", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())

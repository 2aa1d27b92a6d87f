import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Crawlbase Crawling API token; the original scripts read it from TOKEN
CRAWLBASE_TOKEN = os.getenv("CRAWLBASE_TOKEN") or os.getenv("TOKEN", "")
CRAWLBASE_URL = os.getenv("CRAWLBASE_URL", "https://api.crawlbase.com/")

OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", str(BASE_DIR / "output")))

PAGE_DELAY_SECONDS    = float(os.getenv("PAGE_DELAY_SECONDS", "30"))
RETRY_ATTEMPTS        = int(os.getenv("RETRY_ATTEMPTS", "3"))
RETRY_DELAY_SECONDS   = float(os.getenv("RETRY_DELAY_SECONDS", "5"))
MAX_PAGES             = int(os.getenv("MAX_PAGES", "100"))  # 0 = no ceiling
FETCH_TIMEOUT_SECONDS = float(os.getenv("FETCH_TIMEOUT_SECONDS", "60"))

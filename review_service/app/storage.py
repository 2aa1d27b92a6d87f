import json
import re
from datetime import datetime, timezone
from pathlib import Path
from . import config
from .models import ScrapeResult


def output_filename(product_name: str, now: datetime | None = None) -> str:
    """'Acme CRM Reviews' -> 'acme_crm_2025-01-24T10-11-12-345Z.json'"""
    now = now or datetime.now(timezone.utc)
    clean = re.sub(r" Reviews$", "", product_name, flags=re.IGNORECASE)
    sanitized = re.sub(r"[^a-z0-9]", "_", clean, flags=re.IGNORECASE).lower()
    # UTC, millisecond precision, ':' and '.' replaced by '-'
    now = now.astimezone(timezone.utc)
    timestamp = now.strftime("%Y-%m-%dT%H-%M-%S-") + f"{now.microsecond // 1000:03d}Z"
    return f"{sanitized}_{timestamp}.json"


def save_result(result: ScrapeResult, output_dir: Path | str | None = None) -> Path:
    out_dir = Path(output_dir) if output_dir is not None else config.OUTPUT_DIR
    out_dir.mkdir(parents=True, exist_ok=True)

    path = out_dir / output_filename(result.product.name)
    path.write_text(json.dumps(result.to_output(), indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"[Storage] Output file saved to: {path}")
    return path

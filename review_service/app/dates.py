"""
Review date normalization.
Both review sites changed how they render dates over time, so every historical
shape has to keep working: relative phrases ("8 months ago"), "Jan 24, 2025",
"2025/1/24" and "1/24/2025". Anything else goes through dateutil as a last try.
"""
import re
from datetime import date, datetime, timezone
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta
from .errors import NormalizationError

MONTHS = {
    "Jan": 1, "Feb": 2, "Mar": 3, "Apr": 4, "May": 5, "Jun": 6,
    "Jul": 7, "Aug": 8, "Sep": 9, "Oct": 10, "Nov": 11, "Dec": 12,
}

RELATIVE_RE   = re.compile(r"\b(\d+|an?)\s+(year|month|day)s?\s+ago", re.IGNORECASE)
MONTH_NAME_RE = re.compile(r"^([A-Za-z]{3})\s+(\d{1,2}),\s*(\d{4})$")
NUMERIC_RES   = [
    (re.compile(r"^(\d{4})/(\d{1,2})/(\d{1,2})$"), ("year", "month", "day")),   # 2025/1/24
    (re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$"), ("month", "day", "year")),   # 1/24/2025
]


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def _from_relative(raw: str, reference: date) -> date | None:
    match = RELATIVE_RE.search(raw)
    if not match:
        return None
    count_token, unit = match.group(1).lower(), match.group(2).lower()
    try:
        count = 1 if count_token in ("a", "an") else int(count_token)
        if unit == "year":
            # Only the year survives; "2 years ago" is always Jan 1st
            return date(reference.year - count, 1, 1)
        if unit == "month":
            return reference.replace(day=1) - relativedelta(months=count)
    except (ValueError, OverflowError) as e:
        raise NormalizationError(f"relative date {raw!r} is out of range: {e}") from e
    # Day phrases collapse to the start of the reference month regardless of count
    return date(reference.year, reference.month, 1)


def _from_month_name(raw: str) -> date | None:
    match = MONTH_NAME_RE.match(raw)
    if not match:
        return None
    month = MONTHS.get(match.group(1).title())
    if month is None:
        return None
    try:
        return date(int(match.group(3)), month, int(match.group(2)))
    except ValueError:
        return None


def _from_numeric(raw: str) -> date | None:
    for pattern, order in NUMERIC_RES:
        match = pattern.match(raw)
        if not match:
            continue
        parts = dict(zip(order, (int(g) for g in match.groups())))
        try:
            return date(parts["year"], parts["month"], parts["day"])
        except ValueError:
            return None
    return None


def normalize(raw: str, reference: date | None = None) -> date:
    """
    Turns a raw review date into a comparable calendar date.
    Raises NormalizationError when no known encoding matches.
    """
    if reference is None:
        reference = today_utc()
    text = (raw or "").strip()
    if not text:
        raise NormalizationError("empty date")

    for parse in (lambda t: _from_relative(t, reference), _from_month_name, _from_numeric):
        parsed = parse(text)
        if parsed is not None:
            return parsed

    try:
        # Missing parts default to the first of the reference month
        default = datetime(reference.year, reference.month, 1)
        return date_parser.parse(text, default=default).date()
    except (ValueError, OverflowError) as e:
        raise NormalizationError(f"unrecognized date {text!r}: {e}") from e


def try_normalize(raw: str, reference: date | None = None) -> date | None:
    """Same as normalize() but returns None for dates that cannot be placed."""
    try:
        return normalize(raw, reference)
    except NormalizationError:
        return None


def parse_input_date(value: str) -> date:
    """Strict YYYY-MM-DD parsing for run input."""
    if not re.fullmatch(r"\d{4}-\d{2}-\d{2}", value or ""):
        raise ValueError(f"expected YYYY-MM-DD, got {value!r}")
    return datetime.strptime(value, "%Y-%m-%d").date()

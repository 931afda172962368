"""
Query parameter normalization.

Every query parameter of the public endpoints is read as a raw string and
normalized here. Malformed input never produces an error: it falls back to
the documented default instead.
"""

import re
from typing import Optional, Tuple

from app.crud.event import EventFilter

DATE_ONLY_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?[0-9]+)")

# Largest page number accepted; keeps the computed offset within a signed 64-bit integer.
MAX_PAGE = 2 ** 53 - 1

DAY_START = "00:00:00"
DAY_END = "23:59:59"


def parse_boolean(value: Optional[str], default: bool) -> bool:
    """
    Interpret a boolean flag.

    An absent flag takes ``default``. A present flag is true only for ``"1"``
    or ``"true"`` in any case; every other string is false.
    """
    if value is None:
        return default
    return value == "1" or value.lower() == "true"


def parse_date_only(value: Optional[str]) -> Optional[str]:
    """Return the trimmed value if it is a ``YYYY-MM-DD`` string, else None."""
    if not value:
        return None
    trimmed = value.strip()
    return trimmed if DATE_ONLY_PATTERN.match(trimmed) else None


def parse_positive_int(value: Optional[str], default: int, maximum: int) -> int:
    """
    Parse a positive integer parameter.

    The leading integer of the string is used (``"12abc"`` is 12). Missing,
    non-numeric and non-positive input gives ``default``; anything above
    ``maximum`` is clamped to it.
    """
    if not value:
        return default
    match = LEADING_INT_PATTERN.match(value)
    if not match:
        return default
    parsed = int(match.group(1))
    if parsed <= 0:
        return default
    return min(parsed, maximum)


def normalize_date_range(
    peak_start: Optional[str], peak_end: Optional[str]
) -> Tuple[Optional[str], Optional[str]]:
    """
    Validate both dates and put them in ascending order.

    Date-only strings sort lexicographically in calendar order, so a plain
    string comparison decides whether they need swapping.
    """
    start = parse_date_only(peak_start)
    end = parse_date_only(peak_end)
    if start and end and start > end:
        start, end = end, start
    return start, end


def resolve_peak_range(peak_start: Optional[str], peak_end: Optional[str]) -> EventFilter:
    """
    Build the event filter for a requested peak date range.

    The start date becomes an inclusive ``00:00:00`` lower bound and the end
    date an inclusive ``23:59:59`` upper bound.

    Returns:
        EventFilter with the computed timestamp bounds
    """
    start, end = normalize_date_range(peak_start, peak_end)
    return EventFilter(
        start_ts=f"{start} {DAY_START}" if start else None,
        end_ts=f"{end} {DAY_END}" if end else None,
    )


def clean_path_value(value: Optional[str]) -> str:
    """Trim a path parameter; the router has already percent-decoded it."""
    return (value or "").strip()

"""String and date helpers for query-parameter and fixture handling."""

from datetime import date, datetime

from utils.patterns import ISO_DATE


def normalize_code(code: str | None) -> str:
    """Normalize a user-supplied country code for lookup.

    Example:
        " bw " -> "BW"
    """
    if code is None:
        return ""
    return str(code).strip().upper()


def contains_ci(haystack: str | None, needle: str) -> bool:
    """Case-insensitive substring test; a missing haystack never matches."""
    if haystack is None:
        return False
    return needle.casefold() in haystack.casefold()


def parse_iso_date(value) -> date | None:
    """Parse the calendar date at the start of an ISO-8601 string.

    Accepts ``date`` objects, ``"YYYY-MM-DD"`` and full timestamps such as
    ``"2024-03-01T10:00:00Z"``.  Returns ``None`` for anything that is not a
    real calendar date (``"2024-02-30"``, ``"soon"``, ``None``).
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    m = ISO_DATE.match(value.strip())
    if not m:
        return None
    try:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return None

# src/things_bridge/things/dates.py

"""
Date conversion at both ends of the wire.

Encoding: ISO "YYYY-MM-DD" becomes the long form AppleScript's `date "..."`
understands ("February 26, 2026"). Anything else is passed through so callers
can hand over a native AppleScript date string.

Decoding: AppleScript coerces dates to verbose, locale-formatted text
("Thursday, February 26, 2026 at 12:00:00 AM"). We try the known shapes and
fall back to the raw text; decoding never raises.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from ..core.errors import UsageError

MISSING_VALUE = "missing value"

_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")

# Fixed English names: AppleScript's date parser is fed the same text regardless
# of the Python process locale.
_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_VERBOSE_FORMATS = (
    "%A, %B %d, %Y at %I:%M:%S %p",  # en_US 12h
    "%A, %B %d, %Y at %H:%M:%S",  # en_US 24h
    "%A, %d %B %Y at %H:%M:%S",  # en_GB
    "%A, %d %B %Y at %I:%M:%S %p",
    "%A %d %B %Y at %H:%M:%S",
    "%B %d, %Y at %I:%M:%S %p",
    "%B %d, %Y",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
)


def format_date(value: str | None) -> str | None:
    """Convert "YYYY-MM-DD" to "Month D, YYYY"; any other string is returned as-is."""
    if value is None:
        return None
    if not _ISO_DATE_RE.fullmatch(value):
        return value
    try:
        d = date.fromisoformat(value)
    except ValueError:
        raise UsageError(f"Invalid date: {value}") from None
    return f"{_MONTHS[d.month - 1]} {d.day}, {d.year}"


def _normalize_spaces(s: str) -> str:
    # macOS 13+ puts a narrow no-break space before AM/PM.
    return " ".join(s.replace("\u202f", " ").replace("\xa0", " ").split())


def parse_verbose_date(value: str) -> datetime | None:
    s = _normalize_spaces(value)
    for fmt in _VERBOSE_FORMATS:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            continue
    return None


def clean_date(value: str | None) -> str | None:
    """
    Decode one date field:
    - empty / "missing value" -> None
    - midnight -> "YYYY-MM-DD"
    - otherwise -> "YYYY-MM-DDTHH:MM:SS"
    - unparseable -> stripped input
    """
    if value is None:
        return None
    s = value.strip()
    if not s or MISSING_VALUE in s:
        return None

    parsed = parse_verbose_date(s)
    if parsed is None:
        return s

    if parsed.hour == 0 and parsed.minute == 0 and parsed.second == 0:
        return parsed.strftime("%Y-%m-%d")
    return parsed.strftime("%Y-%m-%dT%H:%M:%S")

from __future__ import annotations

import logging
import numbers
import re
import warnings
from datetime import UTC, date, datetime, timedelta
from typing import Any

import pandas as pd

"""Tolerant date parsing for hand-maintained schedule sheets.

The schedule sheet mixes at least four encodings for the same column. Each
cell is tried, in order, as:

1. a native date / datetime (pandas Timestamp included), truncated to the day (UTC)
2. a spreadsheet serial number (days since 1899-12-30)
3. ``YYYY. M. D`` text
4. ``M/D`` text in the current year
5. three numeric parts split on '.', '-' or '/' as Y-M-D (two-digit years are 20xx)
6. whatever pandas can make of the text (`4/25/2025`, `25.04.2025`), except
   the relative keywords `today` / `now`

Nothing here raises: unusable input gives ``None``. ``datetime.date`` refuses
out-of-range components (day 32, Feb 30) instead of rolling them into the
next month, which is the round-trip check every text branch relies on.
"""

__all__ = [
    "SPREADSHEET_EPOCH",
    "normalize_date",
    "parse_filter_date",
    "find_registration_date",
]

logger = logging.getLogger(__name__)

SPREADSHEET_EPOCH = date(1899, 12, 30)

_DOT_PATTERN = re.compile(r"^(\d{4})\.\s*(\d{1,2})\.\s*(\d{1,2})$")
_MONTH_DAY_PATTERN = re.compile(r"^(\d{1,2})/(\d{1,2})$")
_PART_SEPARATORS = re.compile(r"[.\-/]")
_NUMERIC_PART = re.compile(r"^\s*\d+\s*$")
# pandas resolves these against the clock
_RELATIVE_KEYWORDS = frozenset({"today", "now"})


def _build_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _truncate(value: datetime) -> date:
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return value.date()


def _from_serial(value: float) -> date | None:
    if value != value or value in (float("inf"), float("-inf")):
        return None
    # date + timedelta only honours whole days, i.e. floor for fractional serials
    return SPREADSHEET_EPOCH + timedelta(days=float(value))


def _from_text(text: str, today: date | None) -> date | None:
    # a failed `YYYY. M. D` or `M/D` match is final; other layouts fall through
    match = _DOT_PATTERN.match(text)
    if match:
        year, month, day = (int(g) for g in match.groups())
        return _build_date(year, month, day)

    match = _MONTH_DAY_PATTERN.match(text)
    if match:
        month, day = (int(g) for g in match.groups())
        return _build_date((today or date.today()).year, month, day)

    parts = _PART_SEPARATORS.split(text)
    if len(parts) == 3 and all(_NUMERIC_PART.match(p) for p in parts):
        year, month, day = (int(p) for p in parts)
        if year < 100:
            year += 2000
        parsed = _build_date(year, month, day) if year > 1900 else None
        if parsed is not None:
            return parsed

    if text.lower() in _RELATIVE_KEYWORDS:
        return None

    with warnings.catch_warnings():
        # "Could not infer format" 경고는 무시 (NaT 로 판정)
        warnings.simplefilter("ignore")
        stamp = pd.to_datetime(text, errors="coerce")
    if stamp is pd.NaT or pd.isna(stamp):
        return None
    return _truncate(stamp.to_pydatetime())


def normalize_date(value: Any, *, today: date | None = None) -> date | None:
    """Parse a sheet cell into a calendar date.

    Args:
        value: Cell value (number, text, date/datetime/Timestamp, None)
        today: Reference date for the year of ``M/D`` text (default: today)

    Returns:
        The date, or None when the value is blank or unparseable
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, datetime):
            if pd.isna(value):
                return None
            return _truncate(value)
        if isinstance(value, date):
            return value
        if isinstance(value, numbers.Real):
            return _from_serial(float(value))
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            return _from_text(text, today)
    except (ValueError, TypeError, OverflowError) as e:
        logger.warning(f"date parse failed: {value!r} ({e})")
        return None
    return None


def parse_filter_date(text: str | None, *, today: date | None = None) -> date | None:
    """Resolve the optional single-day filter (ISO or sheet-style text).

    An unusable filter is reported and ignored rather than failing the load.
    """
    if text is None or not str(text).strip():
        return None
    parsed = normalize_date(str(text), today=today)
    if parsed is None:
        logger.warning(f"invalid filter date '{text}' -> loading all data")
    return parsed


def find_registration_date(
    content: str, marker: str = "생명보험협회", *, today: date | None = None
) -> date | None:
    """Extract '<marker> 등록일 M/D' from a row's content (current year)."""
    if not content or not marker:
        return None
    match = re.search(re.escape(marker) + r"\s*등록일\s*(\d{1,2})/(\d{1,2})", content)
    if not match:
        return None
    month, day = (int(g) for g in match.groups())
    return _build_date((today or date.today()).year, month, day)

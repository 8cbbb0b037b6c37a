# -*- coding: utf-8 -*-
"""Stateless amount and date helpers.

Nothing in here raises on malformed statement text: a bad amount becomes
``""`` (or ``0.0`` when parsed), a bad date comes back as ``None`` or
unchanged, and the caller decides what that means for the row.
"""
from __future__ import annotations

import logging
import re
from datetime import date
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants & regex helpers
# ---------------------------------------------------------------------------
MONTHS_ABBR = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

PLAIN_AMOUNT_RE = re.compile(r"^-?[\d,]*\.?\d+$")
MARKED_AMOUNT_RE = re.compile(r"^[\d,]+\.\d{2}[-\s]*(?:CR|DB)?$")

SLASH_DATE_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})")
SHORT_DATE_RE = re.compile(r"^(\d{1,2})\s+([A-Za-z]{3})[A-Za-z]*\.?(?:\s+(\d{4}))?")

# Year markers, see detect_statement_year()
STATEMENT_DATE_RE = re.compile(r"Statement Date\s*[:.]?\s*\d{1,2}\s+[A-Za-z]{3}\s+(\d{4})", re.IGNORECASE)
LEADING_DATE_RE = re.compile(r"^\d{1,2}\s+[A-Za-z]{3}\s+(20\d{2})(?:\s+\d+|\s*$)")
ANY_DATE_RE = re.compile(r"\d{1,2}\s+[A-Za-z]{3}\s+(20\d{2})")


def clean_description(desc: str) -> str:
    """Collapse tabs, newlines and runs of spaces into single spaces."""
    return re.sub(r"\s+", " ", desc or "").strip()


def clean_amount(raw: str) -> str:
    """Return *raw* trimmed if it looks like an amount, else ``""``.

    Accepts ``"1,234.56"``, ``"-12.5"`` and suffixed forms such as
    ``"50.00 CR"`` / ``"50.00DB"``.
    """
    if not raw:
        return ""
    cleaned = raw.strip()
    if PLAIN_AMOUNT_RE.match(cleaned) or MARKED_AMOUNT_RE.match(cleaned):
        return cleaned
    return ""


def parse_amount(amt_str: str) -> float:
    """Numeric value of a cleaned amount string.

    A trailing ``CR`` is positive, a trailing ``DB`` negative.  Empty or
    unparseable input is ``0.0``.
    """
    if not amt_str:
        return 0.0
    s = amt_str.replace(",", "").strip()
    sign = 1.0
    if s.endswith("CR"):
        s = s[:-2]
    elif s.endswith("DB"):
        s, sign = s[:-2], -1.0
    try:
        return sign * float(s.strip())
    except ValueError:
        logger.debug(f"Unparseable amount {amt_str!r}")
        return 0.0


def format_date(date_str: str) -> str:
    """Rewrite ``DD/MM/YYYY`` as ``YYYY-MM-DD``; other text is returned as is."""
    m = SLASH_DATE_RE.match(date_str.strip())
    if not m:
        return date_str
    dd, mm, yyyy = m.groups()
    return f"{yyyy}-{mm}-{dd}"


def month_index(abbr: str) -> Optional[int]:
    """0-based month index for a three-letter month name (``"Dec"`` -> 11)."""
    num = MONTHS_ABBR.get(abbr[:3].lower())
    return None if num is None else num - 1


def walk_years(months: List[int], statement_year: int) -> List[int]:
    """Year for each of the chronologically ordered 0-based *months*.

    When the first month is later than the last one the run straddles New
    Year, so the walk starts in the previous year.  Every December -> January
    step moves the running year forward.
    """
    if not months:
        return []

    year = statement_year
    if months[0] > months[-1]:
        year = statement_year - 1
    last_month = months[0]

    years = []
    for month in months:
        if last_month == 11 and month == 0:
            year += 1
        last_month = month
        years.append(year)
    return years


def resolve_short_date(text: str, year: int) -> Optional[str]:
    """Turn ``"31 Dec"`` (or ``"31 Dec 2024"``) into an ISO date.

    An explicit year in *text* wins over *year*.  Returns ``None`` when the
    text is not a real calendar date.
    """
    m = SHORT_DATE_RE.match(text.strip())
    if not m:
        return None
    day, mon, explicit_year = m.groups()
    idx = month_index(mon)
    if idx is None:
        return None
    try:
        return date(int(explicit_year or year), idx + 1, int(day)).isoformat()
    except ValueError:
        return None


def detect_statement_year(lines: Iterable[str], default: Optional[int] = None) -> int:
    """Best-effort statement year from the document text.

    Lines are scanned in order for a ``Statement Date : DD Mon YYYY`` marker
    or a line starting with ``DD Mon YYYY``; failing that, for any
    ``DD Mon 20xx`` anywhere.  Falls back to *default*, then to the current
    calendar year.
    """
    lines = list(lines)
    for line in lines:
        m = STATEMENT_DATE_RE.search(line) or LEADING_DATE_RE.match(line)
        if m:
            return int(m.group(1))

    for line in lines:
        m = ANY_DATE_RE.search(line)
        if m:
            return int(m.group(1))

    year = default or date.today().year
    logger.warning(f"Could not find the statement year, using {year}")
    return year

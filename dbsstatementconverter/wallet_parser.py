# -*- coding: utf-8 -*-
"""wallet_parser.py
Line-oriented parser for PayLah wallet statements.

Wallet statements are simple enough to read line by line: every entry fits on
one physical line as ``DD Mon  description  amount[CR|DB]``.  The awkward part
is the year, which entries never show.  The statement year is taken from the
header and the running year is then walked across the entries, stepping over
the December -> January seam.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .amounts import detect_statement_year, month_index, walk_years
from .models import Transaction

logger = logging.getLogger(__name__)

__all__ = [
    "WalletEntry",
    "extract_entries",
    "assign_years",
    "classify_sign",
    "parse_wallet_lines",
]

ENTRY_RE = re.compile(
    r"^(\d{1,2}\s[A-Za-z]{3})\s+(.+?)\s+(\d{1,3}(?:,\d{3})*\.\d{2}(?:\s*(?:CR|DB))?)$"
)
SUFFIX_RE = re.compile(r"\s*(CR|DB)$")
CREDIT_KW = ("top-up", "received")


@dataclass
class WalletEntry:
    """A matched wallet line before its year is known."""

    day: int
    month: int  # 0-based
    description: str
    amount_str: str
    full_date: str = ""


def extract_entries(lines: Iterable[str]) -> List[WalletEntry]:
    """Pick the entry lines out of the statement text, in order."""
    entries: List[WalletEntry] = []
    for line in lines:
        m = ENTRY_RE.match(line.strip())
        if not m:
            continue
        date_str, desc, amount_str = m.groups()
        day, mon = date_str.split()
        idx = month_index(mon)
        if idx is None:
            logger.debug(f"Skipping line with unknown month {mon!r}: {line}")
            continue
        entries.append(WalletEntry(day=int(day), month=idx, description=desc, amount_str=amount_str))
    return entries


def assign_years(entries: List[WalletEntry], statement_year: int) -> List[WalletEntry]:
    """Fill ``full_date`` on chronologically ordered *entries*.

    See :func:`walk_years` for how the running year crosses New Year.
    """
    years = walk_years([e.month for e in entries], statement_year)
    for entry, year in zip(entries, years):
        entry.full_date = f"{year}-{entry.month + 1:02d}-{entry.day:02d}"
    return entries


def classify_sign(description: str, amount_str: str) -> Tuple[str, bool]:
    """Return ``("CR"|"DB", inferred)`` for an entry.

    An explicit suffix decides; otherwise "top-up" / "received" in the
    description means money in and anything else is treated as spending.
    ``inferred`` is ``True`` when the suffix was missing.
    """
    if amount_str.endswith("CR"):
        return "CR", False
    if amount_str.endswith("DB"):
        return "DB", False
    low = description.lower()
    if any(kw in low for kw in CREDIT_KW):
        return "CR", True
    return "DB", True


def _to_transaction(entry: WalletEntry) -> Transaction:
    kind, inferred = classify_sign(entry.description, entry.amount_str)
    try:
        amount = float(SUFFIX_RE.sub("", entry.amount_str).replace(",", ""))
    except ValueError:
        amount = 0.0
    formatted = f"{amount:.2f}"
    return Transaction(
        date=entry.full_date,
        description=entry.description,
        debit=formatted if kind == "DB" else "",
        credit=formatted if kind == "CR" else "",
        balance="",
        currency="SGD",
        sign_inferred=inferred,
    )


def parse_wallet_lines(lines: List[str], year: Optional[int] = None) -> List[Transaction]:
    """Convert the text lines of a wallet statement into transactions."""
    statement_year = year if year is not None else detect_statement_year(lines)
    entries = assign_years(extract_entries(lines), statement_year)
    logger.info(f"Wallet statement: {len(entries)} entries from {len(lines)} lines (year {statement_year})")
    return [_to_transaction(e) for e in entries]

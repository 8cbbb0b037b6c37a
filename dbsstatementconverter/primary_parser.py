# -*- coding: utf-8 -*-
"""primary_parser.py
Coordinate-driven row builder for DBS account statements.

The statement table has no ruling lines, so rows are rebuilt from positions
alone.  Each page is walked in reading order by a small state machine:

* ``OUTSIDE`` - preamble, summaries and footers; everything is ignored until
  a "Balance Brought Forward" line opens the transaction block of the current
  currency section.
* ``INSIDE`` - a date in the date column opens a :class:`TransactionDraft`;
  fragments on the date's baseline fill description / debit / credit /
  balance by x-position, and description-column fragments a little further
  down extend a wrapped description.

"USD ..." / "SGD ..." fragments switch the currency of the section that
follows, and any "Balance Carried Forward" closes the block.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from .amounts import (
    SHORT_DATE_RE,
    clean_amount,
    clean_description,
    format_date,
    month_index,
    resolve_short_date,
    walk_years,
)
from .config import (
    BROUGHT_FORWARD,
    CARRIED_FORWARD,
    CURRENCIES,
    DEFAULT_BOUNDS,
    DEFAULT_CURRENCY,
    SAME_ROW_BAND,
    SECTION_END_RE,
    WRAP_BAND,
    ColumnBounds,
)
from .models import PositionedToken, Transaction

logger = logging.getLogger(__name__)

__all__ = [
    "TableState",
    "TransactionDraft",
    "PrimaryRowBuilder",
    "resolve_row_dates",
    "parse_primary_pages",
]

ROW_DATE_RE = re.compile(r"^\d{2}\s[A-Z][a-z]{2}")
ROW_SLASH_DATE_RE = re.compile(r"^\d{2}/\d{2}/\d{4}")
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class TableState(Enum):
    OUTSIDE = "outside_table"
    INSIDE = "inside_table"


@dataclass
class TransactionDraft:
    """A statement row under construction."""

    date: str
    currency: str
    anchor_y: float
    description: str = ""
    debit: str = ""
    credit: str = ""
    balance: str = ""
    continuation_ys: List[float] = field(default_factory=list)

    def __post_init__(self):
        if not self.continuation_ys:
            self.continuation_ys.append(self.anchor_y)

    @property
    def last_line_y(self) -> float:
        return self.continuation_ys[-1]

    def absorb(self, tok: PositionedToken, bounds: ColumnBounds) -> bool:
        """Attach *tok* to this row if its position allows it.

        Returns ``False`` for stray fragments that belong to neither the date
        line nor a wrapped description line.
        """
        column = bounds.column_for(tok.x)

        if abs(tok.y - self.anchor_y) < SAME_ROW_BAND:
            if column == "description":
                self.description += " " + tok.text
            elif column is not None:
                setattr(self, column, getattr(self, column) + tok.text)
            return column is not None

        low, high = WRAP_BAND
        if low < abs(tok.y - self.last_line_y) < high and column == "description":
            # Wrapped lines only ever carry description text
            self.description += " " + tok.text
            self.continuation_ys.append(tok.y)
            return True
        return False

    def finalize(self) -> Optional[Transaction]:
        """Build the :class:`Transaction`, or ``None`` if no amount was captured.

        ``DD/MM/YYYY`` dates are rewritten as ISO here; ``DD Mon`` dates are
        left as written for :func:`resolve_row_dates`.
        """
        debit = clean_amount(self.debit)
        credit = clean_amount(self.credit)
        if not debit and not credit:
            logger.debug(f"Dropping row without amount: {self.date} {self.description.strip()!r}")
            return None
        if debit and credit:
            logger.warning(f"Row {self.date} carries both debit {debit} and credit {credit}")

        return Transaction(
            date=format_date(self.date.strip()),
            description=clean_description(self.description),
            debit=debit,
            credit=credit,
            balance=clean_amount(self.balance),
            currency=self.currency or DEFAULT_CURRENCY,
        )


class PrimaryRowBuilder:
    """Single-page state machine producing finalized transactions."""

    def __init__(self, bounds: ColumnBounds = DEFAULT_BOUNDS):
        self.bounds = bounds
        self.state = TableState.OUTSIDE
        self.currency = DEFAULT_CURRENCY
        self.draft: Optional[TransactionDraft] = None
        self.transactions: List[Transaction] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def feed_token(self, tok: PositionedToken):
        text = tok.text
        low = text.lower()

        if SECTION_END_RE.search(text):
            self._close_draft()
            self.state = TableState.OUTSIDE
            return

        stripped = text.strip()
        for code in CURRENCIES:
            if stripped.startswith(code + " "):
                self.currency = code

        if BROUGHT_FORWARD in low:
            self.state = TableState.INSIDE
            return

        if self.state is TableState.OUTSIDE:
            return

        if CARRIED_FORWARD in low:
            self._close_draft()
            self.state = TableState.OUTSIDE
            return

        if self._is_row_starter(tok):
            self._close_draft()
            self.draft = TransactionDraft(date=text, currency=self.currency, anchor_y=tok.y)
            return

        if self.draft is not None:
            self.draft.absorb(tok, self.bounds)

    def finalise(self) -> List[Transaction]:
        """Flush the open row and return everything built so far."""
        self._close_draft()
        return self.transactions

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _is_row_starter(self, tok: PositionedToken) -> bool:
        if tok.x >= self.bounds.date_max:
            return False
        return bool(ROW_DATE_RE.match(tok.text) or ROW_SLASH_DATE_RE.match(tok.text))

    def _close_draft(self):
        if self.draft is None:
            return
        txn = self.draft.finalize()
        if txn is not None:
            self.transactions.append(txn)
        self.draft = None


def resolve_row_dates(transactions: List[Transaction], year: int) -> List[Transaction]:
    """Give year-less ``DD Mon`` row dates a year, in place.

    The rows are taken in statement order and walked with :func:`walk_years`,
    so a January statement that opens in late December dates those rows in
    the previous year.  Rows that already carry an ISO date are left alone,
    and dates that are not a real calendar day are kept as written.
    """
    pending = []
    for txn in transactions:
        m = SHORT_DATE_RE.match(txn.date)
        idx = month_index(m.group(2)) if m else None
        if idx is None:
            if not ISO_DATE_RE.match(txn.date):
                logger.warning(f"Could not parse row date {txn.date!r}; keeping it as written")
            continue
        pending.append((txn, idx))

    years = walk_years([idx for _, idx in pending], year)
    for (txn, _), row_year in zip(pending, years):
        iso = resolve_short_date(txn.date, row_year)
        if iso is None:
            logger.warning(f"Could not parse row date {txn.date!r}; keeping it as written")
            continue
        txn.date = iso
    return transactions


def parse_primary_pages(
    pages: Iterable[List[PositionedToken]],
    year: int,
    bounds: ColumnBounds = DEFAULT_BOUNDS,
) -> List[Transaction]:
    """Run a fresh :class:`PrimaryRowBuilder` over each normalized page.

    Row years are resolved once every page is in, since the New Year seam
    may fall on a page break.
    """
    transactions: List[Transaction] = []
    for page_no, tokens in enumerate(pages, start=1):
        builder = PrimaryRowBuilder(bounds)
        for tok in tokens:
            builder.feed_token(tok)
        page_txns = builder.finalise()
        logger.info(f"Page {page_no}: {len(page_txns)} transactions")
        transactions.extend(page_txns)
    return resolve_row_dates(transactions, year)

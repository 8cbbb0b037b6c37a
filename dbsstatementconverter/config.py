# -*- coding: utf-8 -*-
"""Layout constants for DBS account statements and PayLah wallet statements.

All coordinates are PDF user-space points with ``y`` growing towards the top
of the page (see :mod:`dbsstatementconverter.documents` for the conversion
applied at the engine boundary).
"""
from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class ColumnBounds:
    """Horizontal extent of the account-statement table columns."""

    date_max: float = 90
    desc_min: float = 90
    desc_max: float = 330
    debit_min: float = 330
    debit_max: float = 420
    credit_min: float = 420
    credit_max: float = 500
    balance_min: float = 500

    def column_for(self, x: float) -> str | None:
        """Return the column name whose open x-range contains *x*."""
        if self.desc_min < x < self.desc_max:
            return "description"
        if self.debit_min < x < self.debit_max:
            return "debit"
        if self.credit_min < x < self.credit_max:
            return "credit"
        if x > self.balance_min:
            return "balance"
        return None


DEFAULT_BOUNDS = ColumnBounds()

# ---------------------------------------------------------------------------
# Vertical tolerances
# ---------------------------------------------------------------------------
LINE_TOLERANCE = 2  # tokens closer than this share a row when sorting
SAME_ROW_BAND = 5  # |y - anchorY| below this belongs to the date row
WRAP_BAND = (2, 15)  # open interval for wrapped description lines
WALLET_LINE_GAP = 5  # wallet tokens further than this start a new line

# ---------------------------------------------------------------------------
# Section markers
# ---------------------------------------------------------------------------
CURRENCIES = ("SGD", "USD")
DEFAULT_CURRENCY = "SGD"
SECTION_END_RE = re.compile(r"total balance carried forward in (sgd|usd)", re.IGNORECASE)
BROUGHT_FORWARD = "balance brought forward"
CARRIED_FORWARD = "balance carried forward"

# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------
TOP_UP_MARKER = "TOP-UP TO PAYLAH!"
WALLET_MARKER = "[Wallet]"
AMOUNT_TOLERANCE = 0.01
MAX_DAY_OFFSET = 1

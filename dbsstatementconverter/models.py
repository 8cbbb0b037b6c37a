# -*- coding: utf-8 -*-
"""Data containers shared by the parsers, the matcher and the exporters."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

HeaderList = ["Date", "Description", "Debit", "Credit", "Balance", "Currency"]


@dataclass(frozen=True)
class PositionedToken:
    """A text fragment at a page coordinate, as supplied by a document engine."""

    text: str
    x: float
    y: float


@dataclass
class Transaction:
    """A finalized statement row.

    ``debit``, ``credit`` and ``balance`` keep the statement's own formatting
    (``"1,234.56"``); numeric comparison goes through
    :func:`dbsstatementconverter.amounts.parse_amount`.
    """

    date: str
    description: str
    debit: str = ""
    credit: str = ""
    balance: str = ""
    currency: str = "SGD"
    match_id: Optional[str] = None

    # Display-level fields, filled in after matching / parsing
    matched: Optional[bool] = None
    sign_inferred: bool = False

    def as_row(self) -> list:
        return [self.date, self.description, self.debit, self.credit, self.balance, self.currency]

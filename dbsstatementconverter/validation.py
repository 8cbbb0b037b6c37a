# -*- coding: utf-8 -*-
"""Running-balance check for parsed account statements."""
from __future__ import annotations

from typing import Dict, List

from .amounts import parse_amount
from .models import Transaction


def balance_is_consistent(prev_balance: str, debit: str, credit: str, balance: str, tol: float = 0.01) -> bool:
    expected = parse_amount(prev_balance) - parse_amount(debit) + parse_amount(credit)
    return abs(expected - parse_amount(balance)) < tol


def validate_balances(transactions: List[Transaction]) -> List[bool]:
    """One flag per row: does ``previous - debit + credit`` give this balance?

    Balances are chained per currency; the first row of each currency has
    nothing to compare against and always passes.
    """
    prev: Dict[str, str] = {}
    flags: List[bool] = []
    for txn in transactions:
        if txn.currency not in prev:
            flags.append(True)
        else:
            flags.append(balance_is_consistent(prev[txn.currency], txn.debit, txn.credit, txn.balance))
        prev[txn.currency] = txn.balance
    return flags

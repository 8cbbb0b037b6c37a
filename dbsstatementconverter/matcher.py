# -*- coding: utf-8 -*-
"""Pair PayLah top-ups on the account statement with wallet debits.

Matching is greedy and order dependent on purpose: account rows are visited
in statement order and each takes the *first* free wallet entry (in wallet
order) with the same amount dated the same day or the day after.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from .amounts import parse_amount
from .config import AMOUNT_TOLERANCE, MAX_DAY_OFFSET, TOP_UP_MARKER, WALLET_MARKER
from .models import Transaction

logger = logging.getLogger(__name__)


@dataclass
class MatchSummary:
    primary_count: int
    wallet_count: int
    candidate_count: int
    matched_count: int


def _as_date(value: str) -> Optional[date]:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def is_top_up_candidate(txn: Transaction) -> bool:
    """True for a non-zero account debit that topped up the wallet.

    Rows already rewritten by :func:`apply_wallet_matching` stay candidates so
    that matching can be re-run after more wallet statements arrive.
    """
    desc = txn.description.upper()
    if TOP_UP_MARKER not in desc and not txn.description.startswith(WALLET_MARKER):
        return False
    return bool(txn.debit) and parse_amount(txn.debit) != 0


def _find_wallet_match(candidate: Transaction, wallet: List[Transaction]) -> Optional[Transaction]:
    value = parse_amount(candidate.debit)
    primary_date = _as_date(candidate.date)
    if primary_date is None:
        logger.debug(f"Candidate date {candidate.date!r} is not ISO, cannot match")
        return None

    for entry in wallet:
        if entry.match_id is not None or not entry.debit:
            continue
        if abs(value - parse_amount(entry.debit)) > AMOUNT_TOLERANCE:
            continue
        wallet_date = _as_date(entry.date)
        if wallet_date is None:
            continue
        if 0 <= (wallet_date - primary_date).days <= MAX_DAY_OFFSET:
            return entry
    return None


def match_transactions(primary: List[Transaction], wallet: List[Transaction]) -> int:
    """Assign shared ``M-<n>`` ids to paired rows, in place.

    All existing ids on both sides are cleared first, so the call can be
    repeated freely.  Returns the number of pairs made.
    """
    for txn in primary:
        txn.match_id = None
    for txn in wallet:
        txn.match_id = None

    count = 0
    for txn in primary:
        if not is_top_up_candidate(txn):
            continue
        entry = _find_wallet_match(txn, wallet)
        if entry is None:
            logger.debug(f"No wallet entry for top-up {txn.date} {txn.debit}")
            continue
        count += 1
        txn.match_id = entry.match_id = f"M-{count}"

    logger.info(f"Matched {count} top-ups against {len(wallet)} wallet entries")
    return count


def apply_wallet_matching(primary: List[Transaction], wallet: List[Transaction]) -> int:
    """Match, then flag and relabel top-up rows for display.

    Paired rows get ``matched=True`` and their description replaced with the
    wallet entry's, behind :data:`WALLET_MARKER`; unpaired top-ups get
    ``matched=False``.  Other rows are left untouched.
    """
    count = match_transactions(primary, wallet)
    by_id = {w.match_id: w for w in wallet if w.match_id}

    for txn in primary:
        if not is_top_up_candidate(txn):
            continue
        if txn.match_id is None:
            txn.matched = False
            logger.warning(f"Top-up on {txn.date} for {txn.debit} has no wallet entry")
            continue
        txn.matched = True
        entry = by_id.get(txn.match_id)
        if entry is not None and WALLET_MARKER not in txn.description:
            txn.description = f"{WALLET_MARKER} {entry.description}"
    return count


def summarize(primary: List[Transaction], wallet: List[Transaction]) -> MatchSummary:
    candidates = [t for t in primary if t.matched is not None]
    return MatchSummary(
        primary_count=len(primary),
        wallet_count=len(wallet),
        candidate_count=len(candidates),
        matched_count=sum(1 for t in candidates if t.matched),
    )

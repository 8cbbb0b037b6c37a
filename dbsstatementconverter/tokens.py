# -*- coding: utf-8 -*-
"""tokens.py
Page-level clean-up of positioned text fragments.

Document engines hand back fragments in drawing order, which is rarely
reading order, and some statements draw the same glyph run twice at the same
spot.  :func:`normalize_tokens` turns one page into a top-to-bottom,
left-to-right stream without duplicates; :func:`group_lines` then folds that
stream into physical text lines for the line-oriented wallet parser.
"""
from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import Iterable, List

from .config import LINE_TOLERANCE, WALLET_LINE_GAP
from .models import PositionedToken

logger = logging.getLogger(__name__)

__all__ = ["normalize_tokens", "group_lines"]


def _reading_order(a: PositionedToken, b: PositionedToken) -> int:
    if abs(a.y - b.y) < LINE_TOLERANCE:
        return (a.x > b.x) - (a.x < b.x)
    return (a.y < b.y) - (a.y > b.y)


def normalize_tokens(tokens: Iterable[PositionedToken]) -> List[PositionedToken]:
    """Sort *tokens* into reading order and drop duplicated fragments.

    Two fragments are duplicates when their coordinates rounded to one
    decimal place and their text are identical.
    """
    ordered = sorted((t for t in tokens if t.text), key=cmp_to_key(_reading_order))

    seen = set()
    result: List[PositionedToken] = []
    for tok in ordered:
        key = (f"{tok.x:.1f}", f"{tok.y:.1f}", tok.text)
        if key in seen:
            continue
        seen.add(key)
        result.append(tok)

    dropped = len(ordered) - len(result)
    if dropped:
        logger.debug(f"Dropped {dropped} duplicated fragments")
    return result


def group_lines(tokens: Iterable[PositionedToken], gap: float = WALLET_LINE_GAP) -> List[str]:
    """Merge a normalized token stream into physical lines of text.

    A line is anchored at the ``y`` of its first fragment; any fragment more
    than *gap* units away from that anchor starts the next line.
    """
    lines: List[str] = []
    anchor_y = None
    parts: List[str] = []

    for tok in tokens:
        if anchor_y is None or abs(tok.y - anchor_y) > gap:
            if parts:
                lines.append(" ".join(parts).strip())
            anchor_y = tok.y
            parts = [tok.text]
        else:
            parts.append(tok.text)

    if parts:
        lines.append(" ".join(parts).strip())
    return [ln for ln in lines if ln]

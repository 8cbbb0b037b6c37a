"""
DBS Statement Converter Package

Rebuilds transaction tables from DBS account statements and PayLah wallet
statements, and matches wallet top-ups across the two.
"""

from .converter import ReconciliationSession, parse_primary_statement, parse_wallet_statement
from .documents import PdfPlumberDocument, PyMuPDFDocument, TokenDocument, open_document
from .matcher import apply_wallet_matching, match_transactions
from .models import PositionedToken, Transaction

__version__ = "1.0.0"
__author__ = "DBS Statement Converter Team"

__all__ = [
    "ReconciliationSession",
    "parse_primary_statement",
    "parse_wallet_statement",
    "match_transactions",
    "apply_wallet_matching",
    "open_document",
    "TokenDocument",
    "PdfPlumberDocument",
    "PyMuPDFDocument",
    "PositionedToken",
    "Transaction",
]

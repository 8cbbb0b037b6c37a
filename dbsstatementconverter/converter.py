"""Drives the parsers over whole documents and keeps a reconciliation session.

The primary statement is parsed page by page with the row builder; wallet
statements are parsed from their text lines.  A session holds one primary
statement plus any number of wallet statements and re-matches whenever
either side changes.
"""

import logging
import os
from typing import List, Optional

from .amounts import detect_statement_year
from .config import DEFAULT_BOUNDS, ColumnBounds
from .documents import open_document
from .export import to_dataframe, to_tsv
from .matcher import MatchSummary, apply_wallet_matching, summarize
from .models import Transaction
from .primary_parser import parse_primary_pages
from .tokens import group_lines, normalize_tokens
from .validation import validate_balances
from .wallet_parser import parse_wallet_lines

logger = logging.getLogger(__name__)


def _normalized_pages(document):
  return [normalize_tokens(tokens) for tokens in document.pages()]


def parse_primary_statement(document, bounds: ColumnBounds = DEFAULT_BOUNDS,
                            year: Optional[int] = None) -> List[Transaction]:
  """Parse an account statement into transactions, in statement order."""
  pages = _normalized_pages(document)
  if year is None:
    lines = [line for page in pages for line in group_lines(page)]
    year = detect_statement_year(lines)
  transactions = parse_primary_pages(pages, year, bounds)
  logger.info(f"Primary statement: {len(transactions)} transactions over {len(pages)} pages")
  return transactions


def parse_wallet_statement(document, year: Optional[int] = None) -> List[Transaction]:
  """Parse a wallet statement into transactions, in statement order."""
  lines = []
  for page in _normalized_pages(document):
    lines.extend(group_lines(page))
  return parse_wallet_lines(lines, year)


class ReconciliationSession:
  """One account statement reconciled against accumulated wallet statements."""

  def __init__(self, engine: str = "pdfplumber", bounds: ColumnBounds = DEFAULT_BOUNDS):
    self.engine = engine
    self.bounds = bounds
    self.primary: List[Transaction] = []
    self.primary_source: Optional[str] = None
    self.wallet: List[Transaction] = []
    self.wallet_sources = []

  def _parse(self, source, parse):
    # Anything that already yields tokens is used as is
    if hasattr(source, "page_tokens"):
      return parse(source)
    with open_document(source, self.engine) as doc:
      return parse(doc)

  def load_primary_statement(self, source, name: Optional[str] = None) -> List[Transaction]:
    """Parse and install a primary statement.

    An empty result leaves the current primary data in place; the caller
    decides whether that is an error.
    """
    name = name or os.path.basename(str(source))
    transactions = self._parse(source, lambda doc: parse_primary_statement(doc, self.bounds))
    if not transactions:
      logger.warning(f"No transactions found in {name}")
      return transactions

    self.primary = transactions
    self.primary_source = name
    self.check_balances()
    if self.wallet:
      self.rematch()
    return transactions

  def add_wallet_statement(self, source, name: Optional[str] = None) -> int:
    """Append a wallet statement's entries; a name already loaded is skipped."""
    name = name or os.path.basename(str(source))
    if any(loaded == name for loaded, _ in self.wallet_sources):
      logger.info(f"Wallet statement {name} already loaded, skipping")
      return 0

    transactions = self._parse(source, parse_wallet_statement)
    if not transactions:
      logger.warning(f"No wallet entries found in {name}")
      return 0

    self.wallet_sources.append((name, len(transactions)))
    self.wallet.extend(transactions)
    logger.info(f"Added {len(transactions)} wallet entries from {name}")
    if self.primary:
      self.rematch()
    return len(transactions)

  def rematch(self) -> int:
    return apply_wallet_matching(self.primary, self.wallet)

  def check_balances(self) -> List[Transaction]:
    """Primary rows whose balance does not follow from the row before."""
    failing = [txn for txn, ok in zip(self.primary, validate_balances(self.primary)) if not ok]
    for txn in failing:
      logger.warning(f"Balance {txn.balance or '(blank)'} {txn.currency} on {txn.date} "
                     f"does not follow from the previous row ({txn.description})")
    return failing

  def summary(self) -> MatchSummary:
    return summarize(self.primary, self.wallet)

  def to_dataframe(self):
    return to_dataframe(self.primary)

  def to_tsv(self) -> str:
    return to_tsv(self.primary)

"""Tabular export of parsed transactions."""

from typing import List, Optional

import pandas as pd

from .models import HeaderList, Transaction


def to_dataframe(transactions: List[Transaction]) -> pd.DataFrame:
  """One row per transaction, columns in :data:`HeaderList` order."""
  return pd.DataFrame([t.as_row() for t in transactions], columns=HeaderList, dtype=str)


def to_tsv(transactions: List[Transaction], path: Optional[str] = None) -> Optional[str]:
  """Tab-separated export; returns the text when *path* is not given."""
  return to_dataframe(transactions).to_csv(path, sep="\t", index=False, lineterminator="\n")


def write_tsv(path: str, transactions: List[Transaction]) -> None:
  to_tsv(transactions, path)

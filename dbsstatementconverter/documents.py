# -*- coding: utf-8 -*-
"""documents.py
Document engines that turn a PDF into positioned text fragments.

Every engine exposes the same small surface used by the converters::

    doc.page_count           -> int
    doc.page_tokens(page_no) -> List[PositionedToken]   # 1-based page number

and works as a context manager.  Both PDF libraries measure ``y`` from the
top of the page; fragments are flipped here so that the parsers can treat a
larger ``y`` as "higher up the page".  pdfplumber words are placed at the
bottom of their box (``y = page_height - bottom``), PyMuPDF spans at their
baseline origin (``y = page_height - origin_y``).
Decode errors from the libraries are not caught.
"""
from __future__ import annotations

import logging
from typing import List, Sequence

import fitz  # PyMuPDF
import pdfplumber

from .models import PositionedToken

logger = logging.getLogger(__name__)

ENGINES = ("pdfplumber", "pymupdf")


class _BaseDocument:
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def close(self):
        pass

    def pages(self):
        """Yield each page's fragments in ascending page order."""
        for page_no in range(1, self.page_count + 1):
            yield self.page_tokens(page_no)


class TokenDocument(_BaseDocument):
    """Already-extracted fragments, one list per page."""

    def __init__(self, pages: Sequence[Sequence[PositionedToken]]):
        self._pages = [list(p) for p in pages]

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def page_tokens(self, page_no: int) -> List[PositionedToken]:
        return [t for t in self._pages[page_no - 1] if t.text]


class PdfPlumberDocument(_BaseDocument):
    """pdfplumber word boxes, with blanks kept so column cells stay whole."""

    def __init__(self, source, x_tolerance: float = 3):
        self._pdf = pdfplumber.open(source)
        self.x_tolerance = x_tolerance

    @property
    def page_count(self) -> int:
        return len(self._pdf.pages)

    def page_tokens(self, page_no: int) -> List[PositionedToken]:
        page = self._pdf.pages[page_no - 1]
        height = float(page.height)
        words = page.extract_words(keep_blank_chars=True, x_tolerance=self.x_tolerance)
        tokens = [
            PositionedToken(text=w["text"].strip(), x=float(w["x0"]), y=height - float(w["bottom"]))
            for w in words
            if w["text"].strip()
        ]
        logger.debug(f"pdfplumber page {page_no}: {len(tokens)} fragments")
        return tokens

    def close(self):
        self._pdf.close()


class PyMuPDFDocument(_BaseDocument):
    """PyMuPDF text spans, positioned at their baseline origin."""

    def __init__(self, source):
        if isinstance(source, (bytes, bytearray)):
            self._doc = fitz.open(stream=bytes(source), filetype="pdf")
        else:
            self._doc = fitz.open(source)

    @property
    def page_count(self) -> int:
        return len(self._doc)

    def page_tokens(self, page_no: int) -> List[PositionedToken]:
        page = self._doc[page_no - 1]
        height = page.rect.height
        tokens: List[PositionedToken] = []
        for block in page.get_text("dict")["blocks"]:
            for line in block.get("lines", []):
                for span in line["spans"]:
                    text = span["text"].strip()
                    if not text:
                        continue
                    x, y = span["origin"]
                    tokens.append(PositionedToken(text=text, x=float(x), y=height - float(y)))
        logger.debug(f"PyMuPDF page {page_no}: {len(tokens)} fragments")
        return tokens

    def close(self):
        self._doc.close()


def open_document(source, engine: str = "pdfplumber"):
    """Open *source* (path or file object; bytes for PyMuPDF) with *engine*."""
    if engine == "pdfplumber":
        return PdfPlumberDocument(source)
    if engine == "pymupdf":
        return PyMuPDFDocument(source)
    raise ValueError(f"Unknown document engine {engine!r}; expected one of {', '.join(ENGINES)}")

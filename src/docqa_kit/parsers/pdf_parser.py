# src/docqa_kit/parsers/pdf_parser.py

import logging
from pathlib import Path
from typing import Any, BinaryIO, cast

import pdfplumber

from docqa_kit.chunking.normalize import normalize_text

from .base import DocumentParser
from .models import ExtractedText

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n\n"


class PdfParser(DocumentParser):
    """
    Deterministic PDF text extraction.
    - Pages in document order, each normalized and separated by a blank line
    - Page breaks are offsets into the returned text
    - Empty pages still count as pages
    """

    file_types = ("application/pdf",)

    def parse(self, source: str | Path | BinaryIO) -> ExtractedText:
        pages: list[str] = []

        # pdfplumber.open accepts path-like or buffer objects
        with pdfplumber.open(cast(Any, source)) as pdf:
            for page in pdf.pages:
                pages.append(normalize_text(page.extract_text() or ""))

        text, page_breaks = join_pages(pages)
        title = next((line for line in text.split("\n") if line), "Untitled Document")
        logger.info("Extracted %d characters from %d PDF pages", len(text), len(pages))

        return ExtractedText(
            text=text,
            page_breaks=page_breaks,
            metadata={"source_type": "pdf", "title": title, "pages": len(pages)},
        )


def join_pages(pages: list[str]) -> tuple[str, list[int]]:
    """Join page texts and record the offset where each page but the last ends.

    A chunk starting after a break belongs to a later page.
    """
    parts: list[str] = []
    page_breaks: list[int] = []
    position = 0

    for index, page in enumerate(pages):
        if index > 0:
            page_breaks.append(position)
            if page and position > 0:
                parts.append(PAGE_SEPARATOR)
                position += len(PAGE_SEPARATOR)
        parts.append(page)
        position += len(page)

    return "".join(parts), page_breaks

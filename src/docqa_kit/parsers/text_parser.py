# src/docqa_kit/parsers/text_parser.py

from pathlib import Path
from typing import BinaryIO

from .base import DocumentParser
from .models import ExtractedText


class PlainTextParser(DocumentParser):
    file_types = ("text/plain", "text/markdown")

    def parse(self, source: str | Path | BinaryIO) -> ExtractedText:
        if isinstance(source, (str, Path)):
            raw = Path(source).read_bytes()
        else:
            raw = source.read()

        # Undecodable bytes become U+FFFD rather than failing the upload
        return ExtractedText(
            text=raw.decode("utf-8", errors="replace"),
            metadata={"source_type": "text"},
        )

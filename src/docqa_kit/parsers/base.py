# src/docqa_kit/parsers/base.py

from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO

from .models import ExtractedText


class DocumentParser(ABC):
    file_types: tuple[str, ...] = ()

    @abstractmethod
    def parse(self, source: str | Path | BinaryIO) -> ExtractedText:
        """
        Extract text from a document.

        Requirements:
        - Deterministic output for same input
        - Text is already normalized, so chunk offsets line up with page breaks
        """
        raise NotImplementedError


class UnsupportedFileTypeError(ValueError):
    def __init__(self, file_type: str) -> None:
        super().__init__(f"Unsupported file type: {file_type}")
        self.file_type = file_type

from .base import DocumentParser, UnsupportedFileTypeError
from .models import ExtractedText
from .text_parser import PlainTextParser


def get_parser(file_type: str) -> DocumentParser:
    """Parser for a MIME type.

    Raises:
        UnsupportedFileTypeError: If no parser handles ``file_type``.
    """
    if file_type in PlainTextParser.file_types:
        return PlainTextParser()
    if file_type == "application/pdf":
        from .pdf_parser import PdfParser

        return PdfParser()
    raise UnsupportedFileTypeError(file_type)


__all__ = [
    "DocumentParser",
    "ExtractedText",
    "PlainTextParser",
    "UnsupportedFileTypeError",
    "get_parser",
]

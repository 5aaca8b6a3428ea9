from pathlib import Path

import pytest
from reportlab.lib.pagesizes import LETTER
from reportlab.pdfgen import canvas

from docqa_kit.parsers.models import ExtractedText
from docqa_kit.parsers.pdf_parser import PdfParser


def _write_pdf(path: Path, pages: list[list[str]]) -> None:
    """Deterministic PDF with one text block per page; an empty list is a blank page."""
    c = canvas.Canvas(str(path), pagesize=LETTER)
    _, height = LETTER

    for lines in pages:
        if lines:
            text = c.beginText(40, height - 50)
            for line in lines:
                text.textLine(line)
            c.drawText(text)
        c.showPage()

    c.save()


@pytest.fixture(scope="module")
def pdf_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Create all test PDFs once per module."""
    dir_path: Path = tmp_path_factory.mktemp("pdfs")

    _write_pdf(
        dir_path / "sample.pdf",
        [
            [
                "SERVICE AGREEMENT",
                "",
                "Article 1. Definitions",
                "The Provider supplies hosting services to the Client.",
                "",
                "Article 2. Fees",
                "The Client pays a monthly fee of 100 euros.",
            ]
        ],
    )
    _write_pdf(
        dir_path / "multipage.pdf",
        [
            ["MULTIPAGE DOCUMENT", "", "PAGE ONE CONTENT:", "This content is on page one."],
            ["PAGE TWO CONTENT:", "This content is on page two."],
        ],
    )
    _write_pdf(
        dir_path / "blank_middle.pdf",
        [
            ["First page text."],
            [],
            ["Third page text."],
        ],
    )

    return dir_path


@pytest.fixture(scope="module")
def parsed_sample(pdf_dir: Path) -> ExtractedText:
    """Parse sample PDF once, reuse across tests."""
    with open(pdf_dir / "sample.pdf", "rb") as f:
        return PdfParser().parse(f)


@pytest.fixture(scope="module")
def parsed_multipage(pdf_dir: Path) -> ExtractedText:
    """Parse multipage PDF from its path."""
    return PdfParser().parse(pdf_dir / "multipage.pdf")


@pytest.fixture(scope="module")
def parsed_blank_middle(pdf_dir: Path) -> ExtractedText:
    return PdfParser().parse(pdf_dir / "blank_middle.pdf")

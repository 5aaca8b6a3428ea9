# src/docqa_kit/parsers/models.py

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ExtractedText:
    """Text pulled out of a source document, ready for chunking.

    ``page_breaks`` holds ascending offsets into ``text`` where each page but
    the last ends; it is empty for unpaged sources.
    """

    text: str
    page_breaks: list[int] = field(default_factory=list)
    metadata: dict = field(default_factory=dict)

    @property
    def page_count(self) -> int:
        return len(self.page_breaks) + 1 if self.text else 0

# src/docqa_kit/chunking/models.py

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class ChunkingOptions:
    """Options for the chunking engine.

    Immutable. Validated on construction, so the engine never re-checks them.
    """

    max_chunk_size: int = 1000
    min_chunk_size: int = 200  # Advisory only
    overlap_size: int = 100
    respect_sentence_boundaries: bool = True
    respect_paragraph_boundaries: bool = True
    respect_heading_boundaries: bool = True
    preserve_heading_hierarchy: bool = True
    max_heading_level: int = 6

    def __post_init__(self) -> None:
        if self.max_chunk_size <= 0:
            raise ValueError("max_chunk_size must be > 0")
        if self.min_chunk_size < 0:
            raise ValueError("min_chunk_size must be >= 0")
        if self.overlap_size < 0:
            raise ValueError("overlap_size must be >= 0")
        if self.overlap_size >= self.max_chunk_size:
            raise ValueError("overlap_size must be < max_chunk_size")
        if self.max_heading_level < 1:
            raise ValueError("max_heading_level must be >= 1")


DEFAULT_OPTIONS = ChunkingOptions()


@dataclass(frozen=True)
class HeadingMatch:
    """A structural marker found in normalized text."""

    text: str
    index: int
    level: int | None
    type: str


@dataclass(frozen=True)
class Section:
    text: str
    start_pos: int
    heading: str | None = None
    heading_level: int | None = None


@dataclass(frozen=True)
class ChunkMetadata:
    chunk_index: int
    word_count: int
    char_count: int
    start_position: int
    end_position: int
    total_chunks: int = 1
    heading: str | None = None
    heading_level: int | None = None
    section: str | None = None
    page_number: int | None = None

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Chunk:
    text: str
    metadata: ChunkMetadata

from .chunking import assemble_metadata, chunk_pdf_text, chunk_text, find_page_number
from .headings import clean_heading, detect_headings
from .models import (
    DEFAULT_OPTIONS,
    Chunk,
    ChunkingOptions,
    ChunkMetadata,
    HeadingMatch,
    Section,
)
from .normalize import normalize_offsets, normalize_text
from .sections import segment_sections
from .strategies import (
    CHUNKING_STRATEGIES,
    ChunkingStrategy,
    get_available_strategies,
    get_chunking_strategy,
    validate_chunking_options,
)

__all__ = [
    "CHUNKING_STRATEGIES",
    "DEFAULT_OPTIONS",
    "Chunk",
    "ChunkMetadata",
    "ChunkingOptions",
    "ChunkingStrategy",
    "HeadingMatch",
    "Section",
    "assemble_metadata",
    "chunk_pdf_text",
    "chunk_text",
    "clean_heading",
    "detect_headings",
    "find_page_number",
    "get_available_strategies",
    "get_chunking_strategy",
    "normalize_offsets",
    "normalize_text",
    "segment_sections",
    "validate_chunking_options",
]

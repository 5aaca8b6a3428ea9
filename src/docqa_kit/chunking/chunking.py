# src/docqa_kit/chunking/chunking.py

import logging
from bisect import bisect_left
from collections.abc import Sequence
from dataclasses import replace
from time import monotonic

from docqa_kit.observability import names
from docqa_kit.observability.base import MetricsHook, NoOpMetricsHook

from .models import DEFAULT_OPTIONS, Chunk, ChunkingOptions
from .normalize import normalize_offsets, normalize_text
from .packer import pack_section
from .sections import segment_sections

logger = logging.getLogger(__name__)


def chunk_text(
    text: str,
    options: ChunkingOptions | None = None,
    *,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[Chunk]:
    """Split extracted document text into heading-aware, overlapping chunks.

    Pure and total: any string yields at least one chunk. Empty input yields a
    single chunk with empty text.

    Offsets in chunk metadata refer to the normalized text.
    """
    start = monotonic()
    options = options or DEFAULT_OPTIONS

    normalized = normalize_text(text)
    sections = segment_sections(normalized, options)

    chunks: list[Chunk] = []
    for section in sections:
        chunks.extend(pack_section(section, options, start_index=len(chunks)))

    chunks = assemble_metadata(chunks)

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.CHUNKING_DURATION, elapsed_ms)
    metrics_hook.increment(names.CHUNKING_CHUNKS_CREATED, len(chunks))
    metrics_hook.record_gauge(names.CHUNKING_SECTIONS_DETECTED, len(sections))
    logger.debug(
        "Chunked %d characters into %d sections and %d chunks",
        len(normalized),
        len(sections),
        len(chunks),
    )
    return chunks


def chunk_pdf_text(
    text: str,
    page_breaks: Sequence[int] = (),
    options: ChunkingOptions | None = None,
    *,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[Chunk]:
    """Like ``chunk_text`` but also sets ``page_number`` on every chunk.

    ``page_breaks`` are ascending offsets into ``text`` where each page ends.
    They are mapped onto the normalized text the chunk offsets refer to.
    """
    chunks = chunk_text(text, options, metrics_hook=metrics_hook)
    return assemble_metadata(chunks, normalize_offsets(text, page_breaks))


def assemble_metadata(
    chunks: list[Chunk], page_breaks: Sequence[int] | None = None
) -> list[Chunk]:
    """Back-fill dense indexes, the final count and, when given, page numbers."""
    total = len(chunks)
    assembled = []
    for index, chunk in enumerate(chunks):
        metadata = replace(chunk.metadata, chunk_index=index, total_chunks=total)
        if page_breaks is not None:
            metadata = replace(
                metadata,
                page_number=find_page_number(metadata.start_position, page_breaks),
            )
        assembled.append(replace(chunk, metadata=metadata))
    return assembled


def find_page_number(position: int, page_breaks: Sequence[int]) -> int:
    """1 + the number of breaks strictly before ``position``."""
    return bisect_left(page_breaks, position) + 1

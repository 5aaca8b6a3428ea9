# src/docqa_kit/chunking/packer.py

import re

from .models import Chunk, ChunkingOptions, ChunkMetadata, Section
from .units import Span, paragraph_spans, sentence_spans, window_spans

_SENTENCE_TERMINATORS = re.compile(r"([.!?]+)")


def pack_section(
    section: Section, options: ChunkingOptions, start_index: int = 0
) -> list[Chunk]:
    """Pack one section into chunks of at most ``max_chunk_size`` characters.

    Chunk indexes start at ``start_index`` and ``total_chunks`` is left at 1;
    both are provisional until the whole document has been packed.

    A unit (paragraph or sentence) longer than ``max_chunk_size`` is emitted as
    one oversized chunk, never split further.
    """
    text = section.text

    if len(text) <= options.max_chunk_size:
        stripped = text.strip()
        lead = len(text) - len(text.lstrip())
        return [
            _make_chunk(section, options, stripped, lead + len(stripped), start_index)
        ]

    if options.respect_paragraph_boundaries:
        units = paragraph_spans(text)
    elif options.respect_sentence_boundaries:
        units = sentence_spans(text)
    else:
        # Windows overlap by construction, no overlap seed needed
        return [
            _make_chunk(section, options, text[start:end], end, start_index + i)
            for i, (start, end) in enumerate(
                window_spans(text, options.max_chunk_size, options.overlap_size)
            )
        ]

    return _pack_units(section, options, units, start_index)


def _pack_units(
    section: Section, options: ChunkingOptions, units: list[Span], start_index: int
) -> list[Chunk]:
    text = section.text
    chunks: list[Chunk] = []
    prefix = ""
    first: int | None = None
    last = 0

    for start, end in units:
        if first is None:
            first, last = start, end
            continue

        if len(prefix) + (end - first) <= options.max_chunk_size:
            last = end
            continue

        closed = prefix + text[first:last]
        chunks.append(
            _make_chunk(section, options, closed, last, start_index + len(chunks))
        )
        prefix = _overlap_prefix(
            closed, gap=text[last:start], unit_len=end - start, options=options
        )
        first, last = start, end

    if first is not None:
        chunks.append(
            _make_chunk(
                section,
                options,
                prefix + text[first:last],
                last,
                start_index + len(chunks),
            )
        )
    return chunks


def _overlap_prefix(
    previous: str, *, gap: str, unit_len: int, options: ChunkingOptions
) -> str:
    """Overlap fragment plus the separator that preceded the new unit.

    The overlap window shrinks so that overlap, separator and unit together
    stay within ``max_chunk_size``.
    """
    window = min(options.overlap_size, options.max_chunk_size - unit_len - len(gap))
    if window <= 0:
        return ""
    fragment = create_overlap(
        previous, window, sentence_aligned=options.respect_sentence_boundaries
    )
    return fragment + gap if fragment else ""


def create_overlap(text: str, size: int, sentence_aligned: bool = True) -> str:
    """Trailing ``size`` characters of ``text``, cut back to the last full sentence.

    Falls back to the raw trailing slice when it holds no complete sentence.
    """
    if size <= 0:
        return ""
    if len(text) <= size:
        return text

    tail = text[-size:]
    if sentence_aligned:
        sentence = last_complete_sentence(tail)
        if sentence:
            return sentence
    return tail


def last_complete_sentence(text: str) -> str | None:
    # split with a capture group: [piece, terminator, piece, ..., piece]
    parts = _SENTENCE_TERMINATORS.split(text)
    if len(parts) < 3:
        return None
    sentence = parts[-3].strip()
    if not sentence:
        return None
    return sentence + parts[-2]


def _make_chunk(
    section: Section,
    options: ChunkingOptions,
    text: str,
    end_in_section: int,
    chunk_index: int,
) -> Chunk:
    end_position = section.start_pos + end_in_section
    char_count = len(text)
    return Chunk(
        text=text,
        metadata=ChunkMetadata(
            chunk_index=chunk_index,
            word_count=len(text.split()),
            char_count=char_count,
            start_position=end_position - char_count,
            end_position=end_position,
            heading=section.heading,
            heading_level=(
                section.heading_level if options.preserve_heading_hierarchy else None
            ),
            section=section.heading,
        ),
    )

# src/docqa_kit/chunking/normalize.py

import re
from collections.abc import Sequence

_LINE_ENDINGS = re.compile(r"\r\n?")
_HORIZONTAL_WHITESPACE = re.compile(r"[^\S\n]+")
_SPACE_AROUND_NEWLINE = re.compile(r" ?\n ?")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_NON_WHITESPACE = re.compile(r"\S")


def normalize_text(text: str) -> str:
    """Canonicalize whitespace before structural analysis.

    - line endings become ``\\n``
    - runs of other whitespace become a single space
    - spaces touching a newline are removed, so lines start at column 0
    - three or more newlines become a blank line (``\\n\\n``)
    - leading and trailing whitespace is trimmed

    Total over any string and idempotent.
    """
    if not text:
        return ""

    text = _LINE_ENDINGS.sub("\n", text)
    text = _HORIZONTAL_WHITESPACE.sub(" ", text)
    text = _SPACE_AROUND_NEWLINE.sub("\n", text)
    text = _EXCESS_NEWLINES.sub("\n\n", text)
    return text.strip()


def normalize_offsets(text: str, offsets: Sequence[int]) -> list[int]:
    """Map ascending offsets into ``text`` onto ``normalize_text(text)``.

    Normalization only rewrites whitespace, so the k-th non-whitespace
    character of ``text`` is the k-th one of the normalized text. An offset
    maps to the position just after the last non-whitespace character that
    starts before it, or 0 when there is none.
    """
    raw_chars = _NON_WHITESPACE.finditer(text)
    normalized_chars = _NON_WHITESPACE.finditer(normalize_text(text))

    mapped: list[int] = []
    position = 0
    pending = next(raw_chars, None)
    for offset in offsets:
        while pending is not None and pending.start() < offset:
            position = next(normalized_chars).end()
            pending = next(raw_chars, None)
        mapped.append(position)
    return mapped

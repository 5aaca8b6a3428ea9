# src/docqa_kit/chunking/units.py

"""Span helpers: every function returns trimmed ``(start, end)`` spans into the input."""

import re

Span = tuple[int, int]

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_SENTENCE = re.compile(r"[^.!?]*[.!?]+|[^.!?]+$")


def _trimmed(text: str, start: int, end: int) -> Span | None:
    piece = text[start:end]
    stripped = piece.strip()
    if not stripped:
        return None
    lead = len(piece) - len(piece.lstrip())
    return start + lead, start + lead + len(stripped)


def paragraph_spans(text: str) -> list[Span]:
    """Blank-line delimited paragraphs, empty ones dropped."""
    spans: list[Span] = []
    start = 0
    for match in _PARAGRAPH_BREAK.finditer(text):
        span = _trimmed(text, start, match.start())
        if span:
            spans.append(span)
        start = match.end()
    span = _trimmed(text, start, len(text))
    if span:
        spans.append(span)
    return spans


def sentence_spans(text: str) -> list[Span]:
    """Sentences ending in ``.``, ``!`` or ``?``; a trailing fragment counts as one."""
    spans: list[Span] = []
    for match in _SENTENCE.finditer(text):
        span = _trimmed(text, match.start(), match.end())
        if span:
            spans.append(span)
    return spans


def window_spans(text: str, size: int, overlap: int) -> list[Span]:
    """Fixed-size character windows, each sharing ``overlap`` characters with the last."""
    spans: list[Span] = []
    step = size - overlap
    text_len = len(text)

    for start in range(0, text_len, step):
        end = min(start + size, text_len)
        span = _trimmed(text, start, end)
        if span:
            spans.append(span)
        if end == text_len:
            break

    return spans

# src/docqa_kit/chunking/sections.py

import logging

from .headings import (
    DEFAULT_LEVEL,
    STRUCTURAL_ONLY_TYPES,
    clean_heading,
    detect_headings,
)
from .models import ChunkingOptions, HeadingMatch, Section
from .units import paragraph_spans

logger = logging.getLogger(__name__)

HEADING_MAX_LENGTH = 100


def segment_sections(text: str, options: ChunkingOptions) -> list[Section]:
    """Partition normalized text into sections.

    Three tiers, first non-empty result wins:
    1. heading-delimited sections (text before the first heading is kept as an
       untitled leading section)
    2. one section per blank-line paragraph, heading-like paragraphs named
    3. the whole text as a single untitled section

    Always returns at least one section.
    """
    if options.respect_heading_boundaries:
        matches = detect_headings(text, options.max_heading_level)
        if matches:
            sections = _sections_from_headings(text, matches)
            if sections:
                logger.debug(
                    "Segmented %d sections from %d headings", len(sections), len(matches)
                )
                return sections

    if options.respect_paragraph_boundaries:
        sections = _sections_from_paragraphs(text, options)
        if sections:
            logger.debug("Segmented %d sections from paragraphs", len(sections))
            return sections

    return [Section(text=text, start_pos=0)]


def _sections_from_headings(text: str, matches: list[HeadingMatch]) -> list[Section]:
    sections: list[Section] = []

    leading = text[: matches[0].index].rstrip()
    if leading:
        sections.append(Section(text=leading, start_pos=0))

    for current, following in zip(matches, [*matches[1:], None], strict=True):
        end = following.index if following else len(text)
        body = text[current.index : end].rstrip()
        if not body:
            continue

        if current.type in STRUCTURAL_ONLY_TYPES:
            sections.append(Section(text=body, start_pos=current.index))
            continue

        sections.append(
            Section(
                text=body,
                start_pos=current.index,
                heading=clean_heading(current.text),
                heading_level=current.level,
            )
        )
    return sections


def _sections_from_paragraphs(text: str, options: ChunkingOptions) -> list[Section]:
    sections: list[Section] = []
    for start, end in paragraph_spans(text):
        paragraph = text[start:end]
        if options.respect_heading_boundaries and looks_like_heading(paragraph):
            sections.append(
                Section(
                    text=paragraph,
                    start_pos=start,
                    heading=clean_heading(paragraph),
                    heading_level=min(DEFAULT_LEVEL, options.max_heading_level),
                )
            )
        else:
            sections.append(Section(text=paragraph, start_pos=start))
    return sections


def looks_like_heading(paragraph: str) -> bool:
    """Short, capitalized and unpunctuated.

    Only consulted once heading detection found nothing, so no heading rule
    can match here.
    """
    return (
        len(paragraph) < HEADING_MAX_LENGTH
        and paragraph[:1].isupper()
        and "." not in paragraph
        and "," not in paragraph
    )

# src/docqa_kit/chunking/headings.py

"""Heading detection over normalized text.

Detection is a battery of independent line-anchored rules. Each rule finds its
own matches; the results are merged by position. When two rules match at the
same position the rule listed first in ``HEADING_RULES`` wins, so the order of
the battery doubles as the tie-break.

Levels and clean heading text are pure functions of the matched string.
"""

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from .models import HeadingMatch

# Level given to heading-shaped paragraphs no rule matched
DEFAULT_LEVEL = 3

# Rule types that delimit sections but never name them
STRUCTURAL_ONLY_TYPES = frozenset({"toc", "page_marker"})

ACADEMIC_KEYWORDS = r"(?:Abstract|Introduction|Conclusion|References?|Bibliography)"
TECHNICAL_KEYWORDS = r"(?:Overview|Implementation|API[ \t]+Reference|Configuration)"


def _fixed(level: int) -> Callable[[re.Match[str]], int]:
    return lambda _: level


def _numbering_depth(match: re.Match[str]) -> int:
    return match.group("number").count(".") + 1


@dataclass(frozen=True)
class HeadingRule:
    type: str
    pattern: re.Pattern[str]
    level: Callable[[re.Match[str]], int] | None

    def find(self, text: str, max_level: int) -> Iterator[HeadingMatch]:
        for match in self.pattern.finditer(text):
            yield HeadingMatch(
                text=match.group(0),
                index=match.start(),
                level=self._level_of(match, max_level),
                type=self.type,
            )

    def _level_of(self, match: re.Match[str], max_level: int) -> int | None:
        if self.level is None:
            return None
        return min(self.level(match), max_level)


def _rule(
    type_: str, pattern: str, level: Callable[[re.Match[str]], int] | None
) -> HeadingRule:
    return HeadingRule(type=type_, pattern=re.compile(pattern, re.MULTILINE), level=level)


HEADING_RULES: tuple[HeadingRule, ...] = (
    _rule(
        "markdown",
        r"^(?P<hashes>#{1,6})[ \t]+\S.*$",
        lambda m: len(m.group("hashes")),
    ),
    _rule(
        "toc",
        r"^(?P<number>\d+(?:\.\d+)*)\.?[ \t]+[A-Z].*?\.{3,}[ \t]*\d+$",
        None,
    ),
    _rule(
        "numbered",
        r"^(?P<number>\d+(?:\.\d+)*)\.?[ \t]+[A-Z].*$",
        _numbering_depth,
    ),
    _rule("roman", r"^[IVX]+\.[ \t]+[A-Z].*$", _fixed(1)),
    _rule("lettered", r"^[A-Z]\.[ \t]+[A-Z].*$", _fixed(2)),
    _rule(
        "legal",
        r"^(?P<keyword>Article|Chapter|Section)[ \t]+\d+[.:].*$",
        lambda m: 2 if m.group("keyword") == "Section" else 1,
    ),
    _rule("academic", rf"^{ACADEMIC_KEYWORDS}[.:]", _fixed(1)),
    _rule("technical", rf"^{TECHNICAL_KEYWORDS}[.:]", _fixed(1)),
    _rule("allcaps", r"^[A-Z][A-Z ]{9,}$", _fixed(1)),
    _rule("titlecase", r"^[A-Z][A-Za-z ]+:$", _fixed(2)),
    _rule("page_marker", r"^(?:Page[ \t]+\d+|-[ \t]*\d+[ \t]*-)$", None),
)


def detect_headings(text: str, max_heading_level: int = 6) -> list[HeadingMatch]:
    """Find every heading in ``text``, ordered by position.

    At most one match is kept per position: the one from the earliest rule.
    """
    found: list[tuple[int, int, HeadingMatch]] = []
    for order, rule in enumerate(HEADING_RULES):
        for match in rule.find(text, max_heading_level):
            found.append((match.index, order, match))

    found.sort(key=lambda item: (item[0], item[1]))

    matches: list[HeadingMatch] = []
    for index, _, match in found:
        if matches and matches[-1].index == index:
            continue
        matches.append(match)
    return matches


_MARKER_PREFIXES = (
    re.compile(r"^#{1,6}\s+"),
    re.compile(r"^\d+(?:\.\d+)*\.?\s+"),
    re.compile(r"^[IVX]+\.\s+"),
    re.compile(r"^[A-Z]\.\s+"),
    re.compile(r"^(?:Article|Section|Chapter)\s+\d+[.:]\s*"),
)
_TOC_LEADER = re.compile(r"\s*\.{3,}\s*\d+$")
_TRAILING_PUNCTUATION = re.compile(r"\s*[.:]\s*$")
_PAGE_MARKER = re.compile(r"^(?:Page\s+\d+|-\s*\d+\s*-)$")


def clean_heading(text: str) -> str:
    """Strip structural markers from a matched heading.

    Keyword headings without a title keep their marker, e.g. ``Article 3``.
    Page markers clean to an empty string.
    """
    text = text.strip()
    if _PAGE_MARKER.match(text):
        return ""

    cleaned = _TOC_LEADER.sub("", text)
    for prefix in _MARKER_PREFIXES:
        cleaned = prefix.sub("", cleaned)
    cleaned = _TRAILING_PUNCTUATION.sub("", cleaned).strip()

    if not cleaned:
        return _TRAILING_PUNCTUATION.sub("", text)
    return cleaned

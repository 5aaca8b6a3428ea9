import pytest

from docqa_kit.chunking.headings import clean_heading, detect_headings


class TestDetectHeadings:
    def test_no_headings(self) -> None:
        assert detect_headings("just some lowercase prose.") == []

    def test_markdown_levels(self) -> None:
        matches = detect_headings("# One\ntext\n### Three\nmore")

        assert [(m.text, m.level, m.type) for m in matches] == [
            ("# One", 1, "markdown"),
            ("### Three", 3, "markdown"),
        ]

    def test_results_are_ordered_by_position(self) -> None:
        text = "EXECUTIVE SUMMARY\nbody\n# Later\nbody\n1. Numbered\nbody"
        matches = detect_headings(text)

        assert [m.index for m in matches] == sorted(m.index for m in matches)
        assert [m.type for m in matches] == ["allcaps", "markdown", "numbered"]

    @pytest.mark.parametrize(
        ("line", "level", "type_"),
        [
            ("1 Scope", 1, "numbered"),
            ("1.2 Scope", 2, "numbered"),
            ("1.2.3. Detail", 3, "numbered"),
            ("II. Background", 1, "roman"),
            ("A. Definitions", 2, "lettered"),
            ("Article 5. Term", 1, "legal"),
            ("Chapter 2: Origins", 1, "legal"),
            ("Section 2: Fees", 2, "legal"),
            ("Abstract: we study chunking", 1, "academic"),
            ("References.", 1, "academic"),
            ("API Reference:", 1, "technical"),
            ("Configuration.", 1, "technical"),
            ("EXECUTIVE SUMMARY", 1, "allcaps"),
            ("Key Findings:", 2, "titlecase"),
        ],
    )
    def test_rule_levels(self, line: str, level: int, type_: str) -> None:
        matches = detect_headings(f"{line}\nfollowing text")

        assert len(matches) == 1
        assert matches[0].index == 0
        assert matches[0].level == level
        assert matches[0].type == type_

    @pytest.mark.parametrize("line", ["Page 3", "- 12 -"])
    def test_page_markers_have_no_level(self, line: str) -> None:
        matches = detect_headings(f"text\n{line}\nmore text")

        assert len(matches) == 1
        assert matches[0].type == "page_marker"
        assert matches[0].level is None

    def test_toc_line_wins_over_numbered(self) -> None:
        """Both rules match; the earlier rule in the battery is kept."""
        matches = detect_headings("1. Introduction ........ 3")

        assert len(matches) == 1
        assert matches[0].type == "toc"
        assert matches[0].level is None

    def test_roman_wins_over_lettered(self) -> None:
        matches = detect_headings("I. Overview of the work")

        assert len(matches) == 1
        assert matches[0].type == "roman"
        assert matches[0].level == 1

    def test_academic_wins_over_titlecase(self) -> None:
        matches = detect_headings("Introduction:")

        assert [m.type for m in matches] == ["academic"]

    def test_levels_capped_at_max(self) -> None:
        matches = detect_headings("###### Deep\n1.2.3.4.5 Deeper", max_heading_level=3)

        assert [m.level for m in matches] == [3, 3]

    def test_short_allcaps_line_is_not_a_heading(self) -> None:
        assert detect_headings("SHORT\nbody") == []

    def test_headings_must_start_a_line(self) -> None:
        assert detect_headings("see # not a heading") == []


class TestCleanHeading:
    @pytest.mark.parametrize(
        ("raw", "clean"),
        [
            ("## Getting Started", "Getting Started"),
            ("1.2 Scope", "Scope"),
            ("IV. Results", "Results"),
            ("B. Exceptions", "Exceptions"),
            ("Section 4: Payment terms", "Payment terms"),
            ("Key Findings:", "Key Findings"),
            ("1. Introduction ........ 3", "Introduction"),
            ("EXECUTIVE SUMMARY", "EXECUTIVE SUMMARY"),
        ],
    )
    def test_strips_markers(self, raw: str, clean: str) -> None:
        assert clean_heading(raw) == clean

    def test_keyword_without_title_keeps_marker(self) -> None:
        assert clean_heading("Article 3.") == "Article 3"

    def test_page_marker_cleans_to_empty(self) -> None:
        assert clean_heading("Page 7") == ""


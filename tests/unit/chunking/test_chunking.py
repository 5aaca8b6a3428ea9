import pytest

from docqa_kit.chunking.chunking import (
    assemble_metadata,
    chunk_pdf_text,
    chunk_text,
    find_page_number,
)
from docqa_kit.chunking.models import Chunk, ChunkingOptions, ChunkMetadata
from docqa_kit.chunking.normalize import normalize_text
from docqa_kit.observability import InMemoryMetricsHook, names

SENTENCE = "The quick brown fox jumps over the lazy dog."
PARAGRAPH = " ".join([SENTENCE] * 10)


def _chunk(start: int, index: int = 0) -> Chunk:
    return Chunk(
        text="x",
        metadata=ChunkMetadata(
            chunk_index=index,
            word_count=1,
            char_count=1,
            start_position=start,
            end_position=start + 1,
        ),
    )


class TestChunkText:
    def test_heading_and_short_body_is_one_chunk(self) -> None:
        chunks = chunk_text("# Title\nHello world. This is a test.")

        assert len(chunks) == 1
        meta = chunks[0].metadata
        assert meta.chunk_index == 0
        assert meta.total_chunks == 1
        assert meta.heading == "Title"
        assert meta.heading_level == 1

    def test_two_headings_give_two_chunks(self) -> None:
        body = "word " * 120
        chunks = chunk_text(f"# A\n{body}\n## B\n{body}", ChunkingOptions(max_chunk_size=1000))

        assert [(c.metadata.heading, c.metadata.heading_level) for c in chunks] == [
            ("A", 1),
            ("B", 2),
        ]
        assert all(c.metadata.total_chunks == 2 for c in chunks)

    def test_long_section_splits_with_overlap(self) -> None:
        text = "# Heading\n" + "\n\n".join([PARAGRAPH] * 5)

        chunks = chunk_text(text, ChunkingOptions(max_chunk_size=1000, overlap_size=100))

        assert len(chunks) == 3
        assert all(c.metadata.heading == "Heading" for c in chunks)
        for previous, current in zip(chunks, chunks[1:]):
            fragment = current.text.split("\n\n", 1)[0]
            assert fragment
            assert previous.text.endswith(fragment)

    def test_empty_text_gives_one_empty_chunk(self) -> None:
        chunks = chunk_text("")

        assert len(chunks) == 1
        assert chunks[0].text == ""
        assert chunks[0].metadata.char_count == 0
        assert chunks[0].metadata.total_chunks == 1

    def test_whitespace_only_text_gives_one_empty_chunk(self) -> None:
        assert [c.text for c in chunk_text(" \r\n\t ")] == [""]

    def test_leading_text_is_not_dropped(self) -> None:
        chunks = chunk_text("Intro paragraph.\n# First\nBody.")

        assert chunks[0].text == "Intro paragraph."
        assert chunks[0].metadata.heading is None
        assert chunks[1].metadata.heading == "First"

    def test_offsets_refer_to_normalized_text(self) -> None:
        raw = "Intro   text.\r\n\r\n\r\n# First\r\nBody   line."
        normalized = normalize_text(raw)

        chunks = chunk_text(raw)

        for chunk in chunks:
            meta = chunk.metadata
            assert normalized[meta.start_position : meta.end_position] == chunk.text

    def test_records_metrics(self) -> None:
        hook = InMemoryMetricsHook()

        chunks = chunk_text("# A\nbody\n# B\nbody", metrics_hook=hook)

        assert hook.counters[names.CHUNKING_CHUNKS_CREATED] == len(chunks)
        assert hook.gauges[names.CHUNKING_SECTIONS_DETECTED] == 2
        assert len(hook.latencies[names.CHUNKING_DURATION]) == 1


class TestChunkTextProperties:
    @pytest.fixture
    def document(self) -> str:
        parts = [
            "Preamble before any heading.",
            "# Overview",
            "\n\n".join([PARAGRAPH] * 4),
            "## Details",
            "\n\n".join([PARAGRAPH] * 3),
            "EXECUTIVE SUMMARY",
            "Closing words.",
        ]
        return "\n".join(parts)

    def test_indexes_are_dense(self, document: str) -> None:
        chunks = chunk_text(document, ChunkingOptions(max_chunk_size=600, overlap_size=80))

        assert [c.metadata.chunk_index for c in chunks] == list(range(len(chunks)))
        assert {c.metadata.total_chunks for c in chunks} == {len(chunks)}

    def test_split_chunks_respect_size_bound(self, document: str) -> None:
        chunks = chunk_text(document, ChunkingOptions(max_chunk_size=600, overlap_size=80))

        assert all(c.metadata.char_count <= 600 for c in chunks)

    def test_every_unit_is_covered(self, document: str) -> None:
        chunks = chunk_text(document, ChunkingOptions(max_chunk_size=600, overlap_size=0))
        joined = "\n\n".join(c.text for c in chunks)

        for line in normalize_text(document).split("\n"):
            if line:
                assert line in joined

    def test_start_positions_never_decrease(self, document: str) -> None:
        chunks = chunk_text(document, ChunkingOptions(max_chunk_size=600, overlap_size=80))
        starts = [c.metadata.start_position for c in chunks]

        assert starts == sorted(starts)

    def test_page_numbers_never_decrease(self, document: str) -> None:
        chunks = chunk_pdf_text(
            document, [400, 1500, 2600], ChunkingOptions(max_chunk_size=600)
        )
        pages = [c.metadata.page_number for c in chunks]

        assert pages == sorted(pages)
        assert pages[0] == 1


class TestChunkPdfText:
    def test_assigns_page_numbers(self) -> None:
        text = "\n\n".join([PARAGRAPH] * 3)

        chunks = chunk_pdf_text(text, [450, 901], ChunkingOptions(max_chunk_size=500))

        assert [c.metadata.page_number for c in chunks] == [1, 2, 3]

    def test_breaks_in_raw_text_coordinates(self) -> None:
        text = "Page one body." + " " * 300 + "\n\nPage two body."

        chunks = chunk_pdf_text(
            text, [314], ChunkingOptions(max_chunk_size=20, overlap_size=5)
        )

        assert [(c.text, c.metadata.page_number) for c in chunks] == [
            ("Page one body.", 1),
            ("Page two body.", 2),
        ]

    def test_without_breaks_everything_is_page_one(self) -> None:
        chunks = chunk_pdf_text("# A\nbody\n# B\nbody")

        assert {c.metadata.page_number for c in chunks} == {1}

    def test_plain_chunking_leaves_page_unset(self) -> None:
        assert chunk_text("body")[0].metadata.page_number is None


class TestFindPageNumber:
    def test_between_breaks(self) -> None:
        assert find_page_number(700, [500, 1200]) == 2

    def test_before_first_break(self) -> None:
        assert find_page_number(0, [500, 1200]) == 1

    def test_after_last_break(self) -> None:
        assert find_page_number(5000, [500, 1200]) == 3

    def test_start_on_break_stays_on_earlier_page(self) -> None:
        """Only breaks strictly before the position count."""
        assert find_page_number(500, [500, 1200]) == 1

    def test_no_breaks(self) -> None:
        assert find_page_number(123, []) == 1


class TestAssembleMetadata:
    def test_reindexes_and_sets_total(self) -> None:
        chunks = assemble_metadata([_chunk(0, index=7), _chunk(10, index=7)])

        assert [c.metadata.chunk_index for c in chunks] == [0, 1]
        assert [c.metadata.total_chunks for c in chunks] == [2, 2]
        assert all(c.metadata.page_number is None for c in chunks)

    def test_page_numbers_from_breaks(self) -> None:
        chunks = assemble_metadata([_chunk(0), _chunk(600)], page_breaks=[500])

        assert [c.metadata.page_number for c in chunks] == [1, 2]


class TestChunkingOptionsValidation:
    def test_rejects_non_positive_max(self) -> None:
        with pytest.raises(ValueError, match="max_chunk_size must be > 0"):
            ChunkingOptions(max_chunk_size=0)

    def test_rejects_negative_min(self) -> None:
        with pytest.raises(ValueError, match="min_chunk_size must be >= 0"):
            ChunkingOptions(min_chunk_size=-1)

    def test_rejects_negative_overlap(self) -> None:
        with pytest.raises(ValueError, match="overlap_size must be >= 0"):
            ChunkingOptions(overlap_size=-1)

    def test_rejects_overlap_equal_to_max(self) -> None:
        with pytest.raises(ValueError, match="overlap_size must be < max_chunk_size"):
            ChunkingOptions(max_chunk_size=100, overlap_size=100)

    def test_rejects_zero_heading_level(self) -> None:
        with pytest.raises(ValueError, match="max_heading_level must be >= 1"):
            ChunkingOptions(max_heading_level=0)

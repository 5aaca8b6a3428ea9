import logging

import pytest

from docqa_kit.chunking.models import DEFAULT_OPTIONS
from docqa_kit.chunking.strategies import (
    CHUNKING_STRATEGIES,
    get_available_strategies,
    get_chunking_strategy,
    validate_chunking_options,
)


class TestGetChunkingStrategy:
    @pytest.mark.parametrize(
        ("file_type", "name"),
        [
            ("application/pdf", "Default"),
            ("text/plain", "Simple"),
            ("text/markdown", "Technical"),
            ("application/msword", "Default"),
        ],
    )
    def test_auto_selection_by_file_type(self, file_type: str, name: str) -> None:
        assert get_chunking_strategy(file_type).name == name

    def test_named_strategy_supporting_file_type(self) -> None:
        assert get_chunking_strategy("text/plain", "legal").name == "Legal"

    def test_named_strategy_not_supporting_file_type_falls_back(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            strategy = get_chunking_strategy("text/markdown", "legal")

        assert strategy.name == "Technical"
        assert "legal" in caplog.text

    def test_unknown_strategy_falls_back(self) -> None:
        assert get_chunking_strategy("application/pdf", "nope").name == "Default"


class TestGetAvailableStrategies:
    def test_all_strategies(self) -> None:
        assert len(get_available_strategies()) == len(CHUNKING_STRATEGIES)

    def test_filtered_by_file_type(self) -> None:
        names = [s.name for s in get_available_strategies("text/markdown")]

        assert names == ["Default", "Technical", "Fine-grained"]


class TestValidateChunkingOptions:
    def test_no_overrides_returns_base(self) -> None:
        assert validate_chunking_options() == DEFAULT_OPTIONS

    def test_fills_unset_values_from_base(self) -> None:
        base = CHUNKING_STRATEGIES["legal"].options

        options = validate_chunking_options({"overlap_size": None}, base=base)

        assert options.max_chunk_size == 1500
        assert options.overlap_size == 200

    @pytest.mark.parametrize(
        ("key", "value", "expected"),
        [
            ("max_chunk_size", 5000, 2000),
            ("max_chunk_size", 10, 100),
            ("min_chunk_size", 1, 50),
            ("min_chunk_size", 900, 500),
            ("overlap_size", -20, 0),
            ("max_heading_level", 0, 1),
            ("max_heading_level", 42, 10),
        ],
    )
    def test_clamps_values(self, key: str, value: int, expected: int) -> None:
        options = validate_chunking_options({key: value})

        assert getattr(options, key) == expected

    def test_overlap_kept_below_max(self) -> None:
        options = validate_chunking_options({"max_chunk_size": 150, "overlap_size": 300})

        assert options.max_chunk_size == 150
        assert options.overlap_size == 149

    def test_unknown_keys_are_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            options = validate_chunking_options({"chunk_flavour": "spicy"})

        assert options == DEFAULT_OPTIONS
        assert "chunk_flavour" in caplog.text

    def test_boolean_flags_pass_through(self) -> None:
        options = validate_chunking_options({"respect_heading_boundaries": False})

        assert options.respect_heading_boundaries is False

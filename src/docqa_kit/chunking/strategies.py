# src/docqa_kit/chunking/strategies.py

"""Named chunking profiles and clamping of caller-supplied overrides."""

import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

from .models import DEFAULT_OPTIONS, ChunkingOptions

logger = logging.getLogger(__name__)

PDF = "application/pdf"
PLAIN_TEXT = "text/plain"
MARKDOWN = "text/markdown"


@dataclass(frozen=True)
class ChunkingStrategy:
    name: str
    description: str
    options: ChunkingOptions
    file_types: tuple[str, ...]


CHUNKING_STRATEGIES: dict[str, ChunkingStrategy] = {
    "default": ChunkingStrategy(
        name="Default",
        description="Balanced chunking with heading awareness and semantic boundaries",
        options=DEFAULT_OPTIONS,
        file_types=(PDF, PLAIN_TEXT, MARKDOWN),
    ),
    "technical": ChunkingStrategy(
        name="Technical",
        description="Technical documents with many headings and code blocks",
        options=ChunkingOptions(
            max_chunk_size=800, min_chunk_size=150, overlap_size=80, max_heading_level=8
        ),
        file_types=(PDF, PLAIN_TEXT, MARKDOWN),
    ),
    "academic": ChunkingStrategy(
        name="Academic",
        description="Academic papers with citations and structured sections",
        options=ChunkingOptions(
            max_chunk_size=1200, min_chunk_size=300, overlap_size=150
        ),
        file_types=(PDF, PLAIN_TEXT),
    ),
    "legal": ChunkingStrategy(
        name="Legal",
        description="Legal documents with numbered sections and clauses",
        options=ChunkingOptions(
            max_chunk_size=1500,
            min_chunk_size=400,
            overlap_size=200,
            max_heading_level=10,
        ),
        file_types=(PDF, PLAIN_TEXT),
    ),
    "simple": ChunkingStrategy(
        name="Simple",
        description="Plain text without complex structure",
        options=ChunkingOptions(
            max_chunk_size=600,
            min_chunk_size=100,
            overlap_size=50,
            respect_paragraph_boundaries=False,
            respect_heading_boundaries=False,
            preserve_heading_hierarchy=False,
            max_heading_level=3,
        ),
        file_types=(PLAIN_TEXT,),
    ),
    "fine_grained": ChunkingStrategy(
        name="Fine-grained",
        description="Smaller chunks for detailed analysis and precise retrieval",
        options=ChunkingOptions(
            max_chunk_size=500, min_chunk_size=100, overlap_size=50
        ),
        file_types=(PDF, PLAIN_TEXT, MARKDOWN),
    ),
}

_AUTO_SELECTION = {
    PDF: "default",
    PLAIN_TEXT: "simple",
    MARKDOWN: "technical",
}

# (low, high) bounds applied to caller overrides
_LIMITS = {
    "max_chunk_size": (100, 2000),
    "min_chunk_size": (50, 500),
    "overlap_size": (0, 300),
    "max_heading_level": (1, 10),
}


def get_chunking_strategy(
    file_type: str, strategy_name: str | None = None
) -> ChunkingStrategy:
    """Pick a strategy for a MIME type.

    A named strategy is honoured only if it supports ``file_type``; otherwise
    the strategy is chosen from the file type alone.
    """
    if strategy_name:
        strategy = CHUNKING_STRATEGIES.get(strategy_name)
        if strategy and file_type in strategy.file_types:
            return strategy
        logger.warning(
            "Strategy %r not usable for %s, selecting by file type",
            strategy_name,
            file_type,
        )

    return CHUNKING_STRATEGIES[_AUTO_SELECTION.get(file_type, "default")]


def get_available_strategies(file_type: str | None = None) -> list[ChunkingStrategy]:
    if file_type is None:
        return list(CHUNKING_STRATEGIES.values())
    return [s for s in CHUNKING_STRATEGIES.values() if file_type in s.file_types]


def validate_chunking_options(
    overrides: Mapping[str, Any] | None = None,
    base: ChunkingOptions = DEFAULT_OPTIONS,
) -> ChunkingOptions:
    """Merge caller overrides onto ``base`` and clamp numeric values.

    Unset (``None``) or unknown keys are ignored. The overlap is additionally
    kept below ``max_chunk_size``.
    """
    values = asdict(base)
    for key, value in (overrides or {}).items():
        if key not in values:
            logger.warning("Ignoring unknown chunking option %r", key)
            continue
        if value is not None:
            values[key] = value

    for key, (low, high) in _LIMITS.items():
        values[key] = max(low, min(high, int(values[key])))

    values["overlap_size"] = min(values["overlap_size"], values["max_chunk_size"] - 1)
    return ChunkingOptions(**values)

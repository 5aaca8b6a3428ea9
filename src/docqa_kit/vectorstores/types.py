from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

# Metadata key holding the chunk text next to its positional metadata
TEXT_KEY = "text"


@dataclass(frozen=True)
class VectorItem:
    id: str
    vector: list[float]
    metadata: Mapping[str, Any]


@dataclass(frozen=True)
class QueryResult:
    id: str
    score: float
    metadata: Mapping[str, Any]

    @property
    def text(self) -> str:
        return str(self.metadata.get(TEXT_KEY, ""))


def matches_filters(metadata: Mapping[str, Any], filters: Mapping[str, Any] | None) -> bool:
    """Exact-match metadata filtering shared by the stores that filter in Python."""
    if not filters:
        return True
    return all(metadata.get(key) == value for key, value in filters.items())

from .base import DEFAULT_NAMESPACE, VectorStore
from .types import TEXT_KEY, QueryResult, VectorItem

__all__ = [
    "DEFAULT_NAMESPACE",
    "TEXT_KEY",
    "PgVectorStore",
    "QueryResult",
    "SQLiteVectorStore",
    "VectorItem",
    "VectorStore",
]


def __getattr__(name: str):  # type: ignore[no-untyped-def]
    # Backends import their database drivers lazily
    if name == "PgVectorStore":
        from .pgvectorstore import PgVectorStore

        return PgVectorStore
    if name == "SQLiteVectorStore":
        from .sqlitevectorstore import SQLiteVectorStore

        return SQLiteVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

"""Embedded chunk store backed by SQLite and the sqlite-vec extension."""

import asyncio
import json
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from time import monotonic
from typing import Any

import apsw
import sqlite_vec

from docqa_kit.observability import names
from docqa_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import DEFAULT_NAMESPACE
from .types import QueryResult, VectorItem, matches_filters

logger = logging.getLogger(__name__)

BACKEND = "sqlite"

# Candidates fetched per requested result when filtering after the KNN scan
FILTER_OVERFETCH = 3


def _placeholders(count: int) -> str:
    return ",".join("?" * count)


class SQLiteVectorStore:
    """Chunk vectors in a single ``vec0`` virtual table, partitioned by namespace.

    Rows are keyed by ``"{namespace}:{id}"`` so the same chunk id may exist in
    several documents. Scores are cosine similarities mapped onto ``[0, 1]``.

    Example:
        >>> store = SQLiteVectorStore("chunks.db", dimensions=384)
        >>> await store.upsert(namespace="doc-1", items=[...])
        >>> await store.query(namespace="doc-1", vector=query_vector, top_k=5)
    """

    def __init__(
        self,
        db_path: str | Path = ":memory:",
        dimensions: int = 384,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        if dimensions < 1:
            raise ValueError("dimensions must be at least 1")
        self.metrics_hook = metrics_hook
        self._db_path = str(db_path)
        self._dimensions = dimensions
        self._conn: apsw.Connection | None = None

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def _connection(self) -> apsw.Connection:
        if self._conn is None:
            conn = apsw.Connection(self._db_path)
            conn.enable_load_extension(True)
            conn.load_extension(sqlite_vec.loadable_path())
            conn.enable_load_extension(False)
            conn.execute(
                f"""
                CREATE VIRTUAL TABLE IF NOT EXISTS document_chunks USING vec0(
                    row_key TEXT PRIMARY KEY,
                    namespace TEXT PARTITION KEY,
                    embedding float[{self._dimensions}] distance_metric=cosine,
                    +chunk_id TEXT,
                    +metadata TEXT
                )
                """
            )
            logger.info(
                "Opened SQLite vector store at %s (%d dimensions)",
                self._db_path,
                self._dimensions,
            )
            self._conn = conn
        return self._conn

    @staticmethod
    def _row_key(namespace: str, chunk_id: str) -> str:
        return f"{namespace}:{chunk_id}"

    def _delete_rows(self, namespace: str, chunk_ids: Sequence[str]) -> int:
        if not chunk_ids:
            return 0
        conn = self._connection()
        keys = [self._row_key(namespace, chunk_id) for chunk_id in chunk_ids]
        params = (namespace, *keys)
        where = f"namespace = ? AND row_key IN ({_placeholders(len(keys))})"
        existing: int = conn.execute(
            f"SELECT COUNT(*) FROM document_chunks WHERE {where}", params
        ).fetchall()[0][0]
        conn.execute(f"DELETE FROM document_chunks WHERE {where}", params)
        return existing

    def _record(self, operation: str, metric: str, start: float) -> None:
        labels = {"backend": BACKEND, "operation": operation}
        self.metrics_hook.record_latency(
            metric, 1000 * (monotonic() - start), labels=labels
        )
        self.metrics_hook.increment(names.VECTORSTORE_OPERATIONS_TOTAL, labels=labels)

    async def close(self) -> None:
        if self._conn is not None:
            await asyncio.to_thread(self._conn.close)
            self._conn = None

    async def upsert(
        self, *, namespace: str = DEFAULT_NAMESPACE, items: Iterable[VectorItem]
    ) -> None:
        start = monotonic()
        batch = list(items)
        if not batch:
            return
        for item in batch:
            if len(item.vector) != self._dimensions:
                raise ValueError(
                    f"Vector for {item.id!r} has {len(item.vector)} dimensions, "
                    f"expected {self._dimensions}"
                )

        def _upsert() -> None:
            # vec0 tables have no ON CONFLICT, so replace by delete + insert
            conn = self._connection()
            with conn:
                self._delete_rows(namespace, [item.id for item in batch])
                conn.executemany(
                    """
                    INSERT INTO document_chunks(row_key, namespace, embedding, chunk_id, metadata)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    [
                        (
                            self._row_key(namespace, item.id),
                            namespace,
                            sqlite_vec.serialize_float32(item.vector),
                            item.id,
                            json.dumps(dict(item.metadata)),
                        )
                        for item in batch
                    ],
                )

        await asyncio.to_thread(_upsert)
        logger.debug("Upserted %d vectors into %s", len(batch), namespace)
        self._record("upsert", names.VECTORSTORE_UPSERT_DURATION, start)

    async def query(
        self,
        *,
        namespace: str = DEFAULT_NAMESPACE,
        vector: list[float],
        top_k: int,
        filters: dict[str, Any] | None = None,
    ) -> list[QueryResult]:
        start = monotonic()
        if top_k < 1:
            raise ValueError("top_k must be at least 1")

        def _query() -> list[QueryResult]:
            conn = self._connection()
            k = top_k * FILTER_OVERFETCH if filters else top_k
            rows = conn.execute(
                """
                SELECT chunk_id, distance, metadata
                FROM document_chunks
                WHERE embedding MATCH ? AND k = ? AND namespace = ?
                ORDER BY distance
                """,
                (sqlite_vec.serialize_float32(vector), k, namespace),
            ).fetchall()

            results: list[QueryResult] = []
            for chunk_id, distance, metadata_json in rows:
                metadata = json.loads(metadata_json)
                if not matches_filters(metadata, filters):
                    continue
                # cosine distance spans [0, 2]
                results.append(
                    QueryResult(id=chunk_id, score=1.0 - distance / 2.0, metadata=metadata)
                )
            return results[:top_k]

        results = await asyncio.to_thread(_query)
        self._record("query", names.VECTORSTORE_QUERY_DURATION, start)
        return results

    async def delete(
        self,
        *,
        namespace: str = DEFAULT_NAMESPACE,
        ids: Iterable[str] | None = None,
        filters: dict[str, Any] | None = None,
    ) -> int:
        start = monotonic()
        id_list = list(ids) if ids is not None else []
        if not id_list and not filters:
            raise ValueError("delete requires ids or filters")

        def _delete() -> int:
            conn = self._connection()
            if not filters:
                targets = id_list
            else:
                wanted = set(id_list)
                rows = conn.execute(
                    "SELECT chunk_id, metadata FROM document_chunks WHERE namespace = ?",
                    (namespace,),
                ).fetchall()
                targets = [
                    chunk_id
                    for chunk_id, metadata_json in rows
                    if (not wanted or chunk_id in wanted)
                    and matches_filters(json.loads(metadata_json), filters)
                ]
            with conn:
                return self._delete_rows(namespace, targets)

        deleted = await asyncio.to_thread(_delete)
        self._record("delete", names.VECTORSTORE_DELETE_DURATION, start)
        return deleted

    async def count(self, *, namespace: str = DEFAULT_NAMESPACE) -> int:
        def _count() -> int:
            total: int = (
                self._connection()
                .execute(
                    "SELECT COUNT(*) FROM document_chunks WHERE namespace = ?",
                    (namespace,),
                )
                .fetchall()[0][0]
            )
            return total

        return await asyncio.to_thread(_count)

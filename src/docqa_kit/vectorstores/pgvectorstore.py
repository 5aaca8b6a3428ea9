import asyncio
import logging
import os
from collections.abc import Iterable
from time import monotonic

import numpy as np
import psycopg
from pgvector.psycopg import register_vector
from psycopg import sql
from psycopg.types.json import Json
from psycopg_pool import ConnectionPool

from docqa_kit.observability import names
from docqa_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import DEFAULT_NAMESPACE
from .types import QueryResult, VectorItem

logger = logging.getLogger(__name__)

BACKEND = "pgvector"
TABLE_NAME = "document_chunks"


def _configure_connection(conn: psycopg.Connection) -> None:  # type: ignore[type-arg]
    register_vector(conn)


def _metadata_clauses(filters: dict | None) -> tuple[list[sql.Composable], list]:
    clauses: list[sql.Composable] = []
    params: list = []
    for key, value in (filters or {}).items():
        clauses.append(sql.SQL("metadata ->> %s = %s"))
        params.extend([key, str(value)])
    return clauses, params


class PgVectorStore:
    """Chunk vectors in PostgreSQL with the pgvector extension.

    Queries rank by cosine distance (``<=>``); the score is ``1 - distance``.
    Pool sizes default to ``DOCQA_KIT_PG_POOL_MIN_SIZE`` and
    ``DOCQA_KIT_PG_POOL_MAX_SIZE`` when not passed.
    """

    def __init__(
        self,
        dsn: str,
        pool_min_size: int | None = None,
        pool_max_size: int | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.metrics_hook = metrics_hook
        self._pool = ConnectionPool(
            dsn,
            min_size=_param_or_env(pool_min_size, "DOCQA_KIT_PG_POOL_MIN_SIZE", 1),
            max_size=_param_or_env(pool_max_size, "DOCQA_KIT_PG_POOL_MAX_SIZE", 10),
            configure=_configure_connection,
        )

    async def close(self) -> None:
        await asyncio.to_thread(self._pool.close)

    def _record(self, operation: str, metric: str, start: float) -> None:
        labels = {"backend": BACKEND, "operation": operation}
        self.metrics_hook.record_latency(
            metric, 1000 * (monotonic() - start), labels=labels
        )
        self.metrics_hook.increment(names.VECTORSTORE_OPERATIONS_TOTAL, labels=labels)

    async def upsert(
        self, *, namespace: str = DEFAULT_NAMESPACE, items: Iterable[VectorItem]
    ) -> None:
        start = monotonic()
        rows = [
            (namespace, item.id, np.array(item.vector), Json(dict(item.metadata)))
            for item in items
        ]
        if not rows:
            return

        query = sql.SQL(
            """
        INSERT INTO {table} (namespace, id, embedding, metadata)
        VALUES (%s, %s, %s, %s)
        ON CONFLICT (namespace, id)
        DO UPDATE SET
            embedding = EXCLUDED.embedding,
            metadata = EXCLUDED.metadata
        """
        ).format(table=sql.Identifier(TABLE_NAME))

        def _upsert() -> None:
            with self._pool.connection() as conn, conn.cursor() as cur:
                cur.executemany(query, rows)

        await asyncio.to_thread(_upsert)
        logger.debug("Upserted %d vectors into %s", len(rows), namespace)
        self._record("upsert", names.VECTORSTORE_UPSERT_DURATION, start)

    async def query(
        self,
        *,
        namespace: str = DEFAULT_NAMESPACE,
        vector: list[float],
        top_k: int,
        filters: dict | None = None,
    ) -> list[QueryResult]:
        start = monotonic()
        if top_k < 1:
            raise ValueError("top_k must be at least 1")

        clauses, filter_params = _metadata_clauses(filters)
        query = sql.SQL(
            """
        SELECT id, 1 - (embedding <=> %s) AS score, metadata
        FROM {table}
        WHERE {where}
        ORDER BY embedding <=> %s
        LIMIT %s
        """
        ).format(
            table=sql.Identifier(TABLE_NAME),
            where=sql.SQL(" AND ").join([sql.SQL("namespace = %s"), *clauses]),
        )
        query_vector = np.array(vector)
        params = [query_vector, namespace, *filter_params, query_vector, top_k]

        def _query() -> list[tuple]:
            with self._pool.connection() as conn, conn.cursor() as cur:
                cur.execute(query, params)
                return cur.fetchall()

        rows = await asyncio.to_thread(_query)
        self._record("query", names.VECTORSTORE_QUERY_DURATION, start)
        return [
            QueryResult(id=row[0], score=float(row[1]), metadata=row[2]) for row in rows
        ]

    async def delete(
        self,
        *,
        namespace: str = DEFAULT_NAMESPACE,
        ids: Iterable[str] | None = None,
        filters: dict | None = None,
    ) -> int:
        start = monotonic()
        id_list = list(ids) if ids is not None else []
        if not id_list and not filters:
            raise ValueError("delete requires ids or filters")

        clauses: list[sql.Composable] = [sql.SQL("namespace = %s")]
        params: list = [namespace]
        if id_list:
            clauses.append(sql.SQL("id = ANY(%s)"))
            params.append(id_list)
        filter_clauses, filter_params = _metadata_clauses(filters)
        clauses.extend(filter_clauses)
        params.extend(filter_params)

        query = sql.SQL("DELETE FROM {table} WHERE {where}").format(
            table=sql.Identifier(TABLE_NAME),
            where=sql.SQL(" AND ").join(clauses),
        )

        def _delete() -> int:
            with self._pool.connection() as conn, conn.cursor() as cur:
                cur.execute(query, params)
                return cur.rowcount

        deleted = await asyncio.to_thread(_delete)
        self._record("delete", names.VECTORSTORE_DELETE_DURATION, start)
        return deleted


def _param_or_env(passed_value: int | None, env_var: str, default: int) -> int:
    if passed_value is not None:
        return passed_value
    env_value = os.environ.get(env_var)
    if env_value is not None:
        return int(env_value)
    return default


def create_schema(dsn: str, dimensions: int) -> None:
    """Create the pgvector extension, the chunk table and its HNSW index.

    Runs on its own connection: the store's pool registers the ``vector``
    type on connect, which requires the extension to exist already.
    """
    if dimensions < 1:
        raise ValueError("dimensions must be at least 1")

    table = sql.Identifier(TABLE_NAME)
    with psycopg.connect(dsn, autocommit=True) as conn:
        conn.execute("CREATE EXTENSION IF NOT EXISTS vector")
        conn.execute(
            sql.SQL(
                """
            CREATE TABLE IF NOT EXISTS {table} (
                namespace TEXT NOT NULL,
                id TEXT NOT NULL,
                embedding vector({dims}) NOT NULL,
                metadata JSONB NOT NULL DEFAULT '{{}}'::jsonb,
                PRIMARY KEY (namespace, id)
            )
            """
            ).format(table=table, dims=sql.Literal(dimensions))
        )
        conn.execute(
            sql.SQL(
                "CREATE INDEX IF NOT EXISTS {index} ON {table} "
                "USING hnsw (embedding vector_cosine_ops)"
            ).format(index=sql.Identifier(f"{TABLE_NAME}_embedding_idx"), table=table)
        )
    logger.info("Ensured %s schema with %d dimensions", TABLE_NAME, dimensions)

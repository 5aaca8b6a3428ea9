# src/docqa_kit/pipeline/ingestion.py

import asyncio
import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from time import monotonic
from typing import Any

from docqa_kit.chunking import (
    Chunk,
    chunk_pdf_text,
    chunk_text,
    get_chunking_strategy,
    validate_chunking_options,
)
from docqa_kit.embeddings.base import EmbeddingsClient
from docqa_kit.observability import names
from docqa_kit.observability.base import MetricsHook, NoOpMetricsHook
from docqa_kit.parsers import get_parser
from docqa_kit.vectorstores.base import VectorStore
from docqa_kit.vectorstores.types import TEXT_KEY, VectorItem

logger = logging.getLogger(__name__)

PDF = "application/pdf"

DEFAULT_EMBED_BATCH_SIZE = 64

# NUL and C0 controls other than tab, newline and carriage return, plus DEL
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")


@dataclass(frozen=True)
class IngestionResult:
    document_id: str
    strategy: str
    chunks_created: int
    chunks_stored: int
    chunks_skipped: int


def clean_chunk_text(text: str) -> str:
    """Drop characters databases and tokenizers choke on, then trim."""
    return _CONTROL_CHARS.sub("", text).strip()


def chunk_id(document_id: str, chunk_index: int) -> str:
    return f"{document_id}:{chunk_index}"


class DocumentIngestor:
    """Chunk a document, embed the chunks and store them under its id.

    Each document gets its own vector-store namespace, so questions about
    one document never retrieve chunks of another.
    """

    def __init__(
        self,
        embeddings: EmbeddingsClient,
        vector_store: VectorStore,
        batch_size: int = DEFAULT_EMBED_BATCH_SIZE,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._embeddings = embeddings
        self._vector_store = vector_store
        self._batch_size = batch_size
        self.metrics_hook = metrics_hook

    async def ingest_file(
        self,
        document_id: str,
        path: str | Path,
        file_type: str,
        *,
        strategy: str | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> IngestionResult:
        """Extract text from ``path`` and ingest it.

        Raises:
            UnsupportedFileTypeError: If no parser handles ``file_type``.
        """
        parser = get_parser(file_type)
        extracted = await asyncio.to_thread(parser.parse, path)
        logger.info(
            "Extracted %d characters from %s (%d pages)",
            len(extracted.text),
            Path(path).name,
            extracted.page_count,
        )
        return await self.ingest_text(
            document_id,
            extracted.text,
            file_type=file_type,
            page_breaks=extracted.page_breaks,
            strategy=strategy,
            overrides=overrides,
        )

    async def ingest_text(
        self,
        document_id: str,
        text: str,
        *,
        file_type: str,
        page_breaks: Sequence[int] | None = None,
        strategy: str | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> IngestionResult:
        start = monotonic()
        selected = get_chunking_strategy(file_type, strategy)
        options = validate_chunking_options(overrides, base=selected.options)

        if file_type == PDF:
            chunks = chunk_pdf_text(
                text, page_breaks or (), options, metrics_hook=self.metrics_hook
            )
        else:
            chunks = chunk_text(text, options, metrics_hook=self.metrics_hook)

        kept = [
            (chunk, cleaned)
            for chunk in chunks
            if (cleaned := clean_chunk_text(chunk.text))
        ]
        skipped = len(chunks) - len(kept)

        for offset in range(0, len(kept), self._batch_size):
            batch = kept[offset : offset + self._batch_size]
            embeddings = await self._embeddings.embed([cleaned for _, cleaned in batch])
            items = [
                self._vector_item(document_id, chunk, cleaned, embedding.vector)
                for (chunk, cleaned), embedding in zip(batch, embeddings, strict=True)
            ]
            await self._vector_store.upsert(namespace=document_id, items=items)
            logger.debug(
                "Stored chunks %d-%d of document %s",
                offset,
                offset + len(batch) - 1,
                document_id,
            )

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.INGESTION_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.INGESTION_DOCUMENTS_TOTAL)
        self.metrics_hook.increment(names.INGESTION_CHUNKS_STORED, len(kept))
        if skipped:
            self.metrics_hook.increment(names.INGESTION_CHUNKS_SKIPPED, skipped)

        logger.info(
            "Ingested document %s with %s strategy: %d chunks stored, %d skipped",
            document_id,
            selected.name,
            len(kept),
            skipped,
        )
        return IngestionResult(
            document_id=document_id,
            strategy=selected.name,
            chunks_created=len(chunks),
            chunks_stored=len(kept),
            chunks_skipped=skipped,
        )

    @staticmethod
    def _vector_item(
        document_id: str, chunk: Chunk, text: str, vector: list[float]
    ) -> VectorItem:
        metadata = chunk.metadata.as_dict()
        metadata[TEXT_KEY] = text
        metadata["document_id"] = document_id
        return VectorItem(
            id=chunk_id(document_id, chunk.metadata.chunk_index),
            vector=vector,
            metadata=metadata,
        )

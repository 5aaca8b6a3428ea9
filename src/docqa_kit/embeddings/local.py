# src/docqa_kit/embeddings/local.py

import asyncio
import logging
from collections.abc import Iterator
from time import monotonic

from sentence_transformers import SentenceTransformer

from docqa_kit.observability import names
from docqa_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import Embedding, EmbeddingsClient
from .config import DEFAULT_LOCAL_MODEL

logger = logging.getLogger(__name__)


class LocalEmbeddingsClient(EmbeddingsClient):
    """
    In-process embeddings with sentence-transformers.

    - mean-pooled, normalized vectors by default
    - the model is loaded once per client
    - encoding runs in a worker thread so the event loop stays free
    """

    def __init__(
        self,
        model_name: str = DEFAULT_LOCAL_MODEL,
        batch_size: int = 32,
        normalize: bool = True,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._model = SentenceTransformer(model_name)
        self._model_name = model_name
        self._batch_size = batch_size
        self._normalize = normalize
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized LocalEmbeddingsClient with model=%s, batch_size=%s, normalize=%s",
            model_name,
            batch_size,
            normalize,
        )

    async def embed(self, texts: list[str]) -> list[Embedding]:
        if not texts:
            logger.debug("Empty input, returning empty list")
            return []

        start = monotonic()
        embeddings: list[Embedding] = []

        for batch in _batches(texts, self._batch_size):
            logger.debug("Encoding batch of %d texts", len(batch))
            vectors = await asyncio.to_thread(
                self._model.encode,
                batch,
                convert_to_numpy=True,
                normalize_embeddings=self._normalize,
                show_progress_bar=False,
            )
            embeddings.extend(Embedding(vector=v.tolist()) for v in vectors)

        elapsed_ms = 1000 * (monotonic() - start)
        labels = {"backend": "local", "model": self._model_name}
        self.metrics_hook.record_latency(names.EMBEDDINGS_DURATION, elapsed_ms, labels)
        self.metrics_hook.increment(names.EMBEDDINGS_REQUESTS_TOTAL, labels=labels)
        self.metrics_hook.increment(
            names.EMBEDDINGS_TEXTS_TOTAL, len(embeddings), labels=labels
        )
        logger.info("Embedded %d texts locally in %.0fms", len(embeddings), elapsed_ms)
        return embeddings


def _batches(items: list[str], batch_size: int) -> Iterator[list[str]]:
    for i in range(0, len(items), batch_size):
        yield items[i : i + batch_size]

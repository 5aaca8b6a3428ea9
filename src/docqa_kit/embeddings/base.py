# src/docqa_kit/embeddings/base.py

from dataclasses import dataclass
from typing import Protocol

from docqa_kit.observability.base import MetricsHook


@dataclass(frozen=True)
class Embedding:
    vector: list[float]

    @property
    def dimensions(self) -> int:
        return len(self.vector)


class EmbeddingsClient(Protocol):
    """Turns texts into vectors, one per input, in input order."""

    metrics_hook: MetricsHook

    async def embed(self, texts: list[str]) -> list[Embedding]: ...


async def embed_query(client: EmbeddingsClient, text: str) -> list[float]:
    """Embed a single query string."""
    embeddings = await client.embed([text])
    return embeddings[0].vector

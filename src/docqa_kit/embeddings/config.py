# src/docqa_kit/embeddings/config.py

from dataclasses import dataclass
from typing import Literal

Provider = Literal["openai", "local"]

# 384-dimensional, runs on CPU
DEFAULT_LOCAL_MODEL = "sentence-transformers/all-MiniLM-L6-v2"
DEFAULT_OPENAI_MODEL = "text-embedding-3-small"


@dataclass(frozen=True)
class EmbeddingsConfig:
    provider: Provider
    model: str
    timeout: float = 30.0
    batch_size: int = 32

    # Unit-length vectors, so dot product equals cosine similarity
    normalize: bool = True

    # provider-specific (used only when relevant)
    api_key: str | None = None

from .base import Embedding, EmbeddingsClient, embed_query
from .config import DEFAULT_LOCAL_MODEL, DEFAULT_OPENAI_MODEL, EmbeddingsConfig
from .factory import create_embeddings_client

__all__ = [
    "DEFAULT_LOCAL_MODEL",
    "DEFAULT_OPENAI_MODEL",
    "Embedding",
    "EmbeddingsClient",
    "EmbeddingsConfig",
    "create_embeddings_client",
    "embed_query",
]

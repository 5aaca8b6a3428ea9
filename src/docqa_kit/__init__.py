# Chunking
from .chunking import (
    Chunk,
    ChunkingOptions,
    ChunkMetadata,
    chunk_pdf_text,
    chunk_text,
    get_chunking_strategy,
)

# Embeddings
from .embeddings import (
    Embedding,
    EmbeddingsClient,
    EmbeddingsConfig,
    create_embeddings_client,
)

# LLMs
from .llms import LLMClient, LLMConfig, create_llm_client

# Observability
from .observability import MetricsHook, NoOpMetricsHook

# Parsers
from .parsers import ExtractedText, UnsupportedFileTypeError, get_parser

# Pipeline
from .pipeline import Answer, DocumentIngestor, DocumentQA, IngestionResult

# Prompts
from .prompts import Prompt, PromptsLibrary

# Vector stores
from .vectorstores import QueryResult, VectorItem, VectorStore

__all__ = [
    # Chunking
    "Chunk",
    "ChunkMetadata",
    "ChunkingOptions",
    "chunk_pdf_text",
    "chunk_text",
    "get_chunking_strategy",
    # Embeddings
    "Embedding",
    "EmbeddingsClient",
    "EmbeddingsConfig",
    "create_embeddings_client",
    # LLMs
    "LLMClient",
    "LLMConfig",
    "create_llm_client",
    # Observability
    "MetricsHook",
    "NoOpMetricsHook",
    # Parsers
    "ExtractedText",
    "UnsupportedFileTypeError",
    "get_parser",
    # Pipeline
    "Answer",
    "DocumentIngestor",
    "DocumentQA",
    "IngestionResult",
    # Prompts
    "Prompt",
    "PromptsLibrary",
    # Vector stores
    "QueryResult",
    "VectorItem",
    "VectorStore",
]

from .answering import Answer, DocumentQA
from .ingestion import DocumentIngestor, IngestionResult, clean_chunk_text

__all__ = [
    "Answer",
    "DocumentIngestor",
    "DocumentQA",
    "IngestionResult",
    "clean_chunk_text",
]

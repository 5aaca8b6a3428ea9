# src/docqa_kit/observability/names.py

"""Standard metric names for docqa-kit observability.

Use these constants instead of hardcoded strings.

All duration metrics are in milliseconds. Unit conversion is left to the
metrics backend.
"""

# ============================================================================
# Chunking Metrics
# ============================================================================

CHUNKING_DURATION = "chunking_duration"

# Counters (chunks accumulate over time)
CHUNKING_CHUNKS_CREATED = "chunking_chunks_created"

# Gauges (per document)
CHUNKING_SECTIONS_DETECTED = "chunking_sections_detected"


# ============================================================================
# Embeddings Metrics
# ============================================================================

EMBEDDINGS_DURATION = "embeddings_duration"

# Counters (labelled by backend)
EMBEDDINGS_REQUESTS_TOTAL = "embeddings_requests_total"
EMBEDDINGS_TEXTS_TOTAL = "embeddings_texts_total"


# ============================================================================
# LLM Metrics
# ============================================================================

LLM_COMPLETION_DURATION = "llm_completion_duration"

# Counters (labelled by provider and model)
LLM_REQUESTS_TOTAL = "llm_requests_total"

# Counters (token usage)
LLM_TOKENS_PROMPT = "llm_tokens_prompt"
LLM_TOKENS_COMPLETION = "llm_tokens_completion"
LLM_TOKENS_TOTAL = "llm_tokens_total"


# ============================================================================
# Vector Store Metrics (labelled by backend and operation)
# ============================================================================

VECTORSTORE_UPSERT_DURATION = "vectorstore_upsert_duration"
VECTORSTORE_QUERY_DURATION = "vectorstore_query_duration"
VECTORSTORE_DELETE_DURATION = "vectorstore_delete_duration"

VECTORSTORE_OPERATIONS_TOTAL = "vectorstore_operations_total"


# ============================================================================
# Pipeline Metrics
# ============================================================================

INGESTION_DURATION = "ingestion_duration"
INGESTION_DOCUMENTS_TOTAL = "ingestion_documents_total"
INGESTION_CHUNKS_STORED = "ingestion_chunks_stored"
INGESTION_CHUNKS_SKIPPED = "ingestion_chunks_skipped"

QA_DURATION = "qa_duration"
QA_QUERIES_TOTAL = "qa_queries_total"
QA_MATCHES_RETURNED = "qa_matches_returned"

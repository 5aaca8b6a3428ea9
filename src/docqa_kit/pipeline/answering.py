# src/docqa_kit/pipeline/answering.py

import logging
from dataclasses import dataclass, field
from time import monotonic

from docqa_kit.embeddings.base import EmbeddingsClient, embed_query
from docqa_kit.llms.base import LLMClient, Message, Role
from docqa_kit.observability import names
from docqa_kit.observability.base import MetricsHook, NoOpMetricsHook
from docqa_kit.prompts import PromptsLibrary
from docqa_kit.vectorstores.base import VectorStore
from docqa_kit.vectorstores.types import QueryResult

logger = logging.getLogger(__name__)

QA_PROMPT = "document_qa"
QA_TEMPERATURE = 0.2
DEFAULT_LIMIT = 5

CONTEXT_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class Answer:
    query: str
    answer: str
    matches: list[QueryResult] = field(default_factory=list)


class DocumentQA:
    """Retrieval-augmented answers over one ingested document at a time."""

    def __init__(
        self,
        embeddings: EmbeddingsClient,
        vector_store: VectorStore,
        llm: LLMClient,
        prompts: PromptsLibrary | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._embeddings = embeddings
        self._vector_store = vector_store
        self._llm = llm
        self._prompts = prompts or PromptsLibrary.builtin()
        self.metrics_hook = metrics_hook

    async def search(
        self, document_id: str, query: str, limit: int = DEFAULT_LIMIT
    ) -> list[QueryResult]:
        """Chunks of ``document_id`` most similar to ``query``, best first."""
        vector = await embed_query(self._embeddings, query)
        matches = await self._vector_store.query(
            namespace=document_id, vector=vector, top_k=limit
        )
        self.metrics_hook.record_gauge(names.QA_MATCHES_RETURNED, len(matches))
        logger.debug("Found %d matches in document %s", len(matches), document_id)
        return matches

    async def answer(
        self, document_id: str, query: str, limit: int = DEFAULT_LIMIT
    ) -> Answer:
        start = monotonic()
        matches = await self.search(document_id, query, limit)

        prompt = self._prompts.get(QA_PROMPT)
        content = prompt.render(
            context=CONTEXT_SEPARATOR.join(match.text for match in matches),
            query=query,
        )
        response = await self._llm.complete(
            messages=[Message(role=Role.USER, content=content)],
            temperature=QA_TEMPERATURE,
        )

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.QA_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.QA_QUERIES_TOTAL)
        logger.info(
            "Answered question on document %s from %d chunks (%s)",
            document_id,
            len(matches),
            response.finish_reason,
        )
        return Answer(query=query, answer=response.text, matches=matches)

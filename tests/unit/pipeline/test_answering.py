from unittest.mock import AsyncMock

import pytest

from docqa_kit.llms.base import Role
from docqa_kit.observability import InMemoryMetricsHook, names
from docqa_kit.pipeline.answering import QA_TEMPERATURE, DocumentQA
from docqa_kit.pipeline.ingestion import DocumentIngestor
from docqa_kit.vectorstores.sqlitevectorstore import SQLiteVectorStore
from docqa_kit.vectorstores.types import QueryResult

from .fakes import FakeEmbeddings, RecordingVectorStore

MATCHES = [
    QueryResult(id="doc-1:3", score=0.9, metadata={"text": "The fee is 100 euros."}),
    QueryResult(id="doc-1:1", score=0.7, metadata={"text": "Fees are due monthly."}),
]


@pytest.fixture
def vector_store() -> RecordingVectorStore:
    return RecordingVectorStore(results=MATCHES)


class TestSearch:
    @pytest.mark.asyncio
    async def test_queries_document_namespace(
        self, embeddings: FakeEmbeddings, vector_store: RecordingVectorStore, llm: AsyncMock
    ) -> None:
        qa = DocumentQA(embeddings, vector_store, llm)

        matches = await qa.search("doc-1", "What is the fee?", limit=1)

        assert matches == MATCHES[:1]
        assert vector_store.queries == [
            {"namespace": "doc-1", "vector": [16.0, 1.0], "top_k": 1}
        ]
        assert embeddings.calls == [["What is the fee?"]]

    @pytest.mark.asyncio
    async def test_default_limit_is_five(
        self, embeddings: FakeEmbeddings, vector_store: RecordingVectorStore, llm: AsyncMock
    ) -> None:
        await DocumentQA(embeddings, vector_store, llm).search("doc-1", "q")

        assert vector_store.queries[0]["top_k"] == 5


class TestAnswer:
    @pytest.mark.asyncio
    async def test_answer_uses_matches_as_context(
        self, embeddings: FakeEmbeddings, vector_store: RecordingVectorStore, llm: AsyncMock
    ) -> None:
        qa = DocumentQA(embeddings, vector_store, llm)

        answer = await qa.answer("doc-1", "What is the fee?")

        assert answer.query == "What is the fee?"
        assert answer.answer == "The fee is 100 euros."
        assert answer.matches == MATCHES

        kwargs = llm.complete.call_args.kwargs
        assert kwargs["temperature"] == QA_TEMPERATURE == 0.2
        [message] = kwargs["messages"]
        assert message.role == Role.USER
        assert "The fee is 100 euros.\n\nFees are due monthly." in message.content
        assert "What is the fee?" in message.content

    @pytest.mark.asyncio
    async def test_no_matches_still_asks_model(
        self, embeddings: FakeEmbeddings, llm: AsyncMock
    ) -> None:
        qa = DocumentQA(embeddings, RecordingVectorStore(), llm)

        answer = await qa.answer("doc-1", "Anything?")

        assert answer.matches == []
        llm.complete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_records_metrics(
        self, embeddings: FakeEmbeddings, vector_store: RecordingVectorStore, llm: AsyncMock
    ) -> None:
        hook = InMemoryMetricsHook()
        qa = DocumentQA(embeddings, vector_store, llm, metrics_hook=hook)

        await qa.answer("doc-1", "What is the fee?")

        assert hook.counters[names.QA_QUERIES_TOTAL] == 1
        assert hook.gauges[names.QA_MATCHES_RETURNED] == 2
        assert len(hook.latencies[names.QA_DURATION]) == 1

    @pytest.mark.asyncio
    async def test_llm_errors_propagate(
        self, embeddings: FakeEmbeddings, vector_store: RecordingVectorStore, llm: AsyncMock
    ) -> None:
        llm.complete.side_effect = RuntimeError("provider down")
        qa = DocumentQA(embeddings, vector_store, llm)

        with pytest.raises(RuntimeError, match="provider down"):
            await qa.answer("doc-1", "What is the fee?")


class TestIngestThenAnswer:
    @pytest.mark.asyncio
    async def test_round_trip_through_sqlite(
        self, embeddings: FakeEmbeddings, llm: AsyncMock
    ) -> None:
        store = SQLiteVectorStore(dimensions=2)
        text = "# Fees\nThe fee is 100 euros.\n# Term\nThe term is one year."

        await DocumentIngestor(embeddings, store).ingest_text(
            "doc-1", text, file_type="text/markdown"
        )
        answer = await DocumentQA(embeddings, store, llm).answer("doc-1", "What is the fee?")
        await store.close()

        assert {match.id for match in answer.matches} == {"doc-1:0", "doc-1:1"}
        assert {match.text for match in answer.matches} == {
            "# Fees\nThe fee is 100 euros.",
            "# Term\nThe term is one year.",
        }

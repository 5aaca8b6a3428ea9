from unittest.mock import AsyncMock

import pytest

from .fakes import FakeEmbeddings, RecordingVectorStore, llm_response


@pytest.fixture
def embeddings() -> FakeEmbeddings:
    return FakeEmbeddings()


@pytest.fixture
def vector_store() -> RecordingVectorStore:
    return RecordingVectorStore()


@pytest.fixture
def llm() -> AsyncMock:
    client = AsyncMock()
    client.complete.return_value = llm_response("The fee is 100 euros.")
    return client

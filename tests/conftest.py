"""
Shared fixtures: deterministic fakes for the embedding and vector search clients.
"""
import os

import pytest

# Keep LangSmith tracing off regardless of the developer's shell
os.environ["LANGSMITH_TRACING"] = "false"
os.environ["LANGCHAIN_TRACING_V2"] = "false"

from meditation_api.clients.embedding_client import EmbeddingClient
from meditation_api.database.vector_search import VectorSearchClient
from meditation_api.exceptions import EmbeddingFailure


class FakeEmbeddingClient(EmbeddingClient):
    def __init__(self, vector=None, error=None):
        self.vector = [0.1, 0.2, 0.3, 0.4, 0.5] if vector is None else vector
        self.error = error
        self.calls = []
        self.closed = False

    def embed(self, text):
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.vector

    def close(self):
        self.closed = True


class FakeSearchClient(VectorSearchClient):
    def __init__(self, matches=None, error=None):
        super().__init__()
        self.matches = matches or []
        self.error = error
        self.calls = []
        self.closed = False

    def search_by_vector(self, vector, limit):
        self.calls.append((vector, limit))
        if self.error is not None:
            raise self.error
        return self.matches[:limit]

    def close(self):
        self.closed = True


def meditation(id_, name=None, type_="guided", keywords=None):
    return {
        "_id": id_,
        "name": name or f"Meditation {id_}",
        "type": type_,
        "keywords": keywords if keywords is not None else ["calm"],
        "embedding": [1, 0.5, 0],
        "score": 0.9,
    }


@pytest.fixture
def embedding_client():
    return FakeEmbeddingClient()


@pytest.fixture
def search_client():
    return FakeSearchClient(matches=[meditation("c"), meditation("a"), meditation("b")])


@pytest.fixture
def failing_embedding_client():
    return FakeEmbeddingClient(error=EmbeddingFailure("Embedding service call failed: timed out"))

import pytest
from fastapi.testclient import TestClient

from conftest import FakeEmbeddingClient, FakeSearchClient, meditation
from meditation_api.api.main import app
from meditation_api.exceptions import EmbeddingFailure, SearchFailure
from meditation_api.pipelines.orchestrator import RecommendationOrchestrator
from meditation_api.services.recommendation_service import get_recommendation_orchestrator


@pytest.fixture
def wire():
    """Install an orchestrator built from the given fakes for the duration of a test."""
    def _wire(embedding_client, search_client):
        orchestrator = RecommendationOrchestrator(embedding_client, search_client)
        app.dependency_overrides[get_recommendation_orchestrator] = lambda: orchestrator
        return TestClient(app)

    yield _wire
    app.dependency_overrides.clear()


def test_calm_breathing_returns_three_matches_in_search_order(wire):
    embedding = FakeEmbeddingClient(vector=[0.1, 0.2, 0.3, 0.4, 0.5])
    search = FakeSearchClient(matches=[
        meditation("c", "Deep Breath", "breathing"),
        meditation("a", "Calm Mind", "guided"),
        meditation("b", "Box Breathing", "breathing"),
    ])
    client = wire(embedding, search)

    r = client.get("/recommend", params={"keywords": "calm breathing", "limit": 3})

    assert r.status_code == 200, r.text
    assert r.json() == [
        {"id": "c", "name": "Deep Breath", "type": "breathing"},
        {"id": "a", "name": "Calm Mind", "type": "guided"},
        {"id": "b", "name": "Box Breathing", "type": "breathing"},
    ]
    assert search.calls == [([0.1, 0.2, 0.3, 0.4, 0.5], 3)]


def test_zero_matches_returns_204_with_empty_body(wire):
    client = wire(FakeEmbeddingClient(), FakeSearchClient(matches=[]))

    r = client.get("/recommend", params={"keywords": "xyzzy", "limit": 5})

    assert r.status_code == 204
    assert r.content == b""


def test_embedding_timeout_returns_500_and_search_is_never_called(wire):
    search = FakeSearchClient(matches=[meditation("a")])
    embedding = FakeEmbeddingClient(error=EmbeddingFailure("Embedding service call failed: read timed out"))
    client = wire(embedding, search)

    r = client.get("/recommend", params={"keywords": "calm"})

    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}
    assert "timed out" not in r.text
    assert search.calls == []


def test_search_failure_returns_generic_500(wire):
    search = FakeSearchClient(error=SearchFailure("index meditations_vector_search not found"))
    client = wire(FakeEmbeddingClient(), search)

    r = client.get("/recommend", params={"keywords": "calm"})

    assert r.status_code == 500
    assert "meditations_vector_search" not in r.text


def test_limit_defaults_to_five(wire):
    search = FakeSearchClient(matches=[meditation(str(i)) for i in range(8)])
    client = wire(FakeEmbeddingClient(), search)

    r = client.get("/recommend", params={"keywords": "calm"})

    assert r.status_code == 200
    assert len(r.json()) == 5
    assert search.calls[0][1] == 5


def test_zero_limit_is_normalized_to_one(wire):
    search = FakeSearchClient(matches=[meditation("a"), meditation("b")])
    client = wire(FakeEmbeddingClient(), search)

    r = client.get("/recommend", params={"keywords": "calm", "limit": 0})

    assert r.status_code == 200
    assert [item["id"] for item in r.json()] == ["a"]
    assert search.calls[0][1] == 1


@pytest.mark.parametrize("params", [{}, {"keywords": ""}, {"keywords": "   "}, {"keywords": "calm", "limit": "many"}])
def test_invalid_request_is_rejected_before_pipeline(wire, params):
    embedding = FakeEmbeddingClient()
    client = wire(embedding, FakeSearchClient())

    r = client.get("/recommend", params=params)

    assert r.status_code == 422
    assert embedding.calls == []


def test_health_is_always_ok(wire):
    # Even with broken downstream clients
    client = wire(FakeEmbeddingClient(error=EmbeddingFailure("down")), FakeSearchClient(error=SearchFailure("down")))

    r = client.get("/health")

    assert r.status_code == 200
    assert r.json() == {"status": "healthy", "message": "Service is running"}


def test_unexpected_error_is_masked(wire):
    class BrokenSearchClient(FakeSearchClient):
        def search_by_vector(self, vector, limit):
            raise RuntimeError("driver bug with secret detail")

    wire(FakeEmbeddingClient(), BrokenSearchClient())
    client = TestClient(app, raise_server_exceptions=False)

    r = client.get("/recommend", params={"keywords": "calm"})

    assert r.status_code == 500
    assert "secret" not in r.text

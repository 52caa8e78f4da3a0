"""
Recommendation service wiring: builds the orchestrator and its clients from settings
"""
import logging
import threading
from typing import Optional

from meditation_api.clients.embedding_client import HttpEmbeddingClient
from meditation_api.config import Settings, get_settings
from meditation_api.database.vector_search import VectorSearchClient
from meditation_api.pipelines.orchestrator import RecommendationOrchestrator

logger = logging.getLogger(__name__)


def build_vector_search_client(settings: Settings) -> VectorSearchClient:
    """Pick the vector store implementation named by VECTOR_STORE_BACKEND"""
    if settings.vector_store_backend == "qdrant":
        from meditation_api.database.qdrant_client import QdrantVectorSearchClient
        return QdrantVectorSearchClient.from_settings(settings)

    from meditation_api.database.mongodb_client import MongoVectorSearchClient
    return MongoVectorSearchClient.from_settings(settings)


def build_recommendation_orchestrator(settings: Settings) -> RecommendationOrchestrator:
    embedding_client = HttpEmbeddingClient(
        settings.embedding_service_url,
        timeout=settings.embedding_timeout_seconds,
    )
    search_client = build_vector_search_client(settings)
    logger.info(f"Recommendation orchestrator built with {settings.vector_store_backend} vector store")
    return RecommendationOrchestrator(embedding_client, search_client)


_orchestrator: Optional[RecommendationOrchestrator] = None
_orchestrator_lock = threading.Lock()


def get_recommendation_orchestrator() -> RecommendationOrchestrator:
    """FastAPI dependency returning the process-wide orchestrator"""
    global _orchestrator
    if _orchestrator is None:
        # Sync dependencies run in the threadpool; build exactly once
        with _orchestrator_lock:
            if _orchestrator is None:
                _orchestrator = build_recommendation_orchestrator(get_settings())
    return _orchestrator


def shutdown_recommendation_orchestrator() -> None:
    """Close the process-wide orchestrator's clients, if one was built"""
    global _orchestrator
    with _orchestrator_lock:
        orchestrator, _orchestrator = _orchestrator, None
    if orchestrator is not None:
        orchestrator.close()
        logger.info("Recommendation orchestrator closed")

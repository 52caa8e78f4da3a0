from typing import List
from datetime import datetime, timezone
import logging
from langgraph.graph import StateGraph, END
from langgraph.graph.state import CompiledStateGraph

# LangSmith tracing
from langsmith import traceable

from meditation_api.clients.embedding_client import EmbeddingClient
from meditation_api.database.vector_search import VectorSearchClient
from meditation_api.exceptions import EmbeddingFailure, RecommendationFailure, SearchFailure
from meditation_api.models.pipeline_models import RecommendationState
from meditation_api.models.response_models import RecommendationResult
from meditation_api.pipelines.embed_keywords_node import make_embed_keywords_node
from meditation_api.pipelines.vector_search_node import make_vector_search_node
from meditation_api.pipelines.map_results_node import map_results_node

logger = logging.getLogger(__name__)

MIN_LIMIT = 1


class RecommendationOrchestrator:
    """
    Fail-fast keyword recommendation pipeline:
    1. Embed keywords (remote embedding service)
    2. Vector search (document store index, best match first)
    3. Map raw matches to RecommendationResult, preserving search order

    No retries, no caching, no partial results on failure.
    """

    def __init__(self, embedding_client: EmbeddingClient, search_client: VectorSearchClient):
        self.embedding_client = embedding_client
        self.search_client = search_client
        self.graph = self._build_graph()

    def _build_graph(self) -> CompiledStateGraph:
        workflow = StateGraph(RecommendationState)

        workflow.add_node("embed_keywords", make_embed_keywords_node(self.embedding_client))
        workflow.add_node("vector_search", make_vector_search_node(self.search_client))
        workflow.add_node("map_results", map_results_node)

        workflow.set_entry_point("embed_keywords")
        workflow.add_edge("embed_keywords", "vector_search")
        workflow.add_edge("vector_search", "map_results")
        workflow.add_edge("map_results", END)

        graph = workflow.compile()
        logger.info("LangGraph workflow compiled successfully")
        return graph

    def close(self):
        """Close both downstream clients"""
        try:
            self.embedding_client.close()
        finally:
            self.search_client.close()

    @staticmethod
    def normalize_limit(limit: int) -> int:
        # 0 and negatives mean "the minimum", never "everything"
        return max(int(limit), MIN_LIMIT)

    @traceable(name="recommendation_pipeline")
    def recommend(self, keywords: str, limit: int) -> List[RecommendationResult]:
        """
        Run the pipeline for one request.

        Raises:
            RecommendationFailure: with stage "embedding" or "search"
        """
        start_time = datetime.now(timezone.utc)
        effective_limit = self.normalize_limit(limit)
        if effective_limit != limit:
            logger.info(f"Normalized limit {limit} to {effective_limit}")

        initial_state: RecommendationState = {
            "keywords": keywords,
            "limit": effective_limit,
            "embedding": None,
            "raw_matches": None,
            "results": None,
            "pipeline_step": "initialized",
            "skipped_records": 0,
        }

        try:
            result = self.graph.invoke(initial_state)
        except EmbeddingFailure as e:
            raise RecommendationFailure("embedding", e) from e
        except SearchFailure as e:
            raise RecommendationFailure("search", e) from e

        execution_time = (datetime.now(timezone.utc) - start_time).total_seconds()
        results = result.get("results") or []
        logger.info(f"Pipeline completed for keywords '{keywords}' in {execution_time:.2f}s: "
                    f"{len(results)} results")
        return results

import logging
from typing import Callable

from langsmith import traceable

from meditation_api.database.vector_search import VectorSearchClient
from meditation_api.models.pipeline_models import RecommendationState

logger = logging.getLogger(__name__)


def make_vector_search_node(search_client: VectorSearchClient) -> Callable[[RecommendationState], dict]:
    """
    Build the node that queries the vector index with the keyword embedding
    """

    @traceable(name="vector_search")
    def vector_search_node(state: RecommendationState) -> dict:
        raw_matches = search_client.search_by_vector(state["embedding"], state["limit"])

        logger.info(f"Vector search completed: {len(raw_matches)} matches")
        return {"raw_matches": list(raw_matches), "pipeline_step": "vector_search_completed"}

    return vector_search_node

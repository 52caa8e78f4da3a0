import logging
from typing import Callable

from langsmith import traceable

from meditation_api.clients.embedding_client import EmbeddingClient
from meditation_api.exceptions import EmbeddingFailure
from meditation_api.models.pipeline_models import RecommendationState

logger = logging.getLogger(__name__)


def make_embed_keywords_node(embedding_client: EmbeddingClient) -> Callable[[RecommendationState], dict]:
    """
    Build the node that turns the request keywords into a query vector.
    EmbeddingFailure propagates so the graph stops before searching.
    """

    @traceable(name="embed_keywords")
    def embed_keywords_node(state: RecommendationState) -> dict:
        embedding = embedding_client.embed(state["keywords"])
        if embedding is None:
            raise EmbeddingFailure("Embedding client returned no vector")

        logger.info(f"Keywords embedded: dimension={len(embedding)}")
        return {"embedding": embedding, "pipeline_step": "embedding_generated"}

    return embed_keywords_node

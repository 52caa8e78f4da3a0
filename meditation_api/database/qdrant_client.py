import logging
from typing import List, Dict, Any

from qdrant_client import QdrantClient
from qdrant_client.http import models

from meditation_api.config import Settings
from meditation_api.database.vector_search import (
    DEFAULT_NUM_CANDIDATES_CEILING,
    DEFAULT_NUM_CANDIDATES_FACTOR,
    VectorSearchClient,
)
from meditation_api.exceptions import SearchFailure

logger = logging.getLogger(__name__)


class QdrantVectorSearchClient(VectorSearchClient):
    """
    Vector search over a Qdrant collection whose point payloads carry
    the meditation fields (name, type, keywords)
    """

    def __init__(self, client: QdrantClient, collection_name: str = "meditations",
                 num_candidates_factor: int = DEFAULT_NUM_CANDIDATES_FACTOR,
                 num_candidates_ceiling: int = DEFAULT_NUM_CANDIDATES_CEILING):
        super().__init__(num_candidates_factor, num_candidates_ceiling)
        self.client = client
        self.collection_name = collection_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "QdrantVectorSearchClient":
        # Check if host contains protocol (http:// or https://)
        if settings.qdrant_host.startswith(("http://", "https://")):
            client = QdrantClient(url=settings.qdrant_host, api_key=settings.qdrant_api_key)
        else:
            client = QdrantClient(
                host=settings.qdrant_host,
                port=settings.qdrant_port,
                api_key=settings.qdrant_api_key,
            )
        logger.info(f"Qdrant vector search configured: collection {settings.qdrant_collection}")
        return cls(
            client,
            collection_name=settings.qdrant_collection,
            num_candidates_factor=settings.num_candidates_factor,
            num_candidates_ceiling=settings.num_candidates_ceiling,
        )

    def search_by_vector(self, vector: List[float], limit: int) -> List[Dict[str, Any]]:
        self.validate_query(vector, limit)
        logger.info(f"Running vector search on Qdrant: limit={limit}, "
                    f"hnsw_ef={self.num_candidates(limit)}")

        try:
            response = self.client.query_points(
                collection_name=self.collection_name,
                query=vector,
                limit=limit,
                search_params=models.SearchParams(hnsw_ef=self.num_candidates(limit)),
                with_payload=True,
                with_vectors=False,
            )
        except Exception as e:
            logger.error(f"Qdrant vector search failed: {str(e)}")
            raise SearchFailure(f"Qdrant vector search failed: {e}", cause=e) from e

        # Flatten points into the same raw shape MongoDB returns
        matches = []
        for point in response.points:
            match = dict(point.payload or {})
            match["_id"] = str(point.id)
            match["score"] = point.score
            matches.append(match)

        logger.info(f"Qdrant vector search completed: {len(matches)} raw results")
        return matches

    def close(self):
        self.client.close()

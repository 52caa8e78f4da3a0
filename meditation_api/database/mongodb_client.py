import logging
from typing import Dict, Any, List

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from meditation_api.config import Settings
from meditation_api.database.vector_search import (
    DEFAULT_NUM_CANDIDATES_CEILING,
    DEFAULT_NUM_CANDIDATES_FACTOR,
    VectorSearchClient,
)
from meditation_api.exceptions import SearchFailure

logger = logging.getLogger(__name__)


class MongoVectorSearchClient(VectorSearchClient):
    """
    MongoDB Atlas Vector Search over the meditations collection
    (Atma-Contents.meditations by default)
    """

    def __init__(self, collection: Collection, index_name: str = "meditations_vector_search",
                 vector_path: str = "embedding",
                 num_candidates_factor: int = DEFAULT_NUM_CANDIDATES_FACTOR,
                 num_candidates_ceiling: int = DEFAULT_NUM_CANDIDATES_CEILING):
        super().__init__(num_candidates_factor, num_candidates_ceiling)
        self.collection = collection
        self.index_name = index_name
        self.vector_path = vector_path
        self.client = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoVectorSearchClient":
        # MongoClient connects lazily; nothing is contacted until the first query
        client = MongoClient(settings.mongodb_connection_string)
        collection = client[settings.mongodb_database][settings.mongodb_collection]
        instance = cls(
            collection,
            index_name=settings.vector_index_name,
            vector_path=settings.vector_path,
            num_candidates_factor=settings.num_candidates_factor,
            num_candidates_ceiling=settings.num_candidates_ceiling,
        )
        instance.client = client
        logger.info(
            f"MongoDB vector search configured: {settings.mongodb_database}."
            f"{settings.mongodb_collection} (index {settings.vector_index_name})"
        )
        return instance

    def build_pipeline(self, vector: List[float], limit: int) -> List[Dict[str, Any]]:
        """
        Aggregation pipeline for $vectorSearch. The index name is the stage's
        first argument; vector, field path and limits live inside the stage.
        """
        return [
            {
                "$vectorSearch": {
                    "index": self.index_name,
                    "queryVector": vector,
                    "path": self.vector_path,
                    "numCandidates": self.num_candidates(limit),
                    "limit": limit,
                }
            },
            {"$addFields": {"score": {"$meta": "vectorSearchScore"}}},
        ]

    def search_by_vector(self, vector: List[float], limit: int) -> List[Dict[str, Any]]:
        self.validate_query(vector, limit)
        logger.info(f"Running vector search on MongoDB Atlas: limit={limit}, "
                    f"numCandidates={self.num_candidates(limit)}")

        try:
            results = list(self.collection.aggregate(self.build_pipeline(vector, limit)))
        except PyMongoError as e:
            logger.error(f"MongoDB vector search failed: {str(e)}")
            raise SearchFailure(f"MongoDB vector search failed: {e}", cause=e) from e

        logger.info(f"MongoDB vector search completed: {len(results)} raw results")
        return results

    def close(self):
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            logger.info("MongoDB connection closed")

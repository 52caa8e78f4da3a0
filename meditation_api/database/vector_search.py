from abc import ABC, abstractmethod
from typing import Any, Dict, List

from meditation_api.exceptions import SearchFailure

DEFAULT_NUM_CANDIDATES_FACTOR = 20
DEFAULT_NUM_CANDIDATES_CEILING = 100
# Atlas rejects numCandidates above this; limit may not exceed numCandidates
MAX_NUM_CANDIDATES = 10000


class VectorSearchClient(ABC):
    """
    Similarity search over the stored meditation vectors.
    Implementations return raw matches ordered best-first and raise
    SearchFailure instead of returning partial or empty results on error.
    """

    def __init__(self, num_candidates_factor: int = DEFAULT_NUM_CANDIDATES_FACTOR,
                 num_candidates_ceiling: int = DEFAULT_NUM_CANDIDATES_CEILING):
        self.num_candidates_factor = num_candidates_factor
        self.num_candidates_ceiling = num_candidates_ceiling

    @abstractmethod
    def search_by_vector(self, vector: List[float], limit: int) -> List[Dict[str, Any]]:
        ...

    def close(self):
        """Release the store connection; no-op unless overridden"""

    def num_candidates(self, limit: int) -> int:
        """
        Candidate pool handed to the index: over-fetch, capped, never below
        limit and never above MAX_NUM_CANDIDATES
        """
        pool = min(limit * self.num_candidates_factor, self.num_candidates_ceiling)
        return min(max(pool, limit), MAX_NUM_CANDIDATES)

    @staticmethod
    def validate_query(vector: List[float], limit: int):
        if not vector:
            raise SearchFailure("Query vector must not be empty")
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise SearchFailure(f"Search limit must be a positive integer, got: {limit!r}")
        if limit > MAX_NUM_CANDIDATES:
            raise SearchFailure(
                f"Search limit {limit} exceeds the vector index maximum of {MAX_NUM_CANDIDATES}"
            )

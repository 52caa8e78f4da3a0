"""Error taxonomy for the recommendation pipeline."""
from typing import Any, Optional


class RecommendationServiceError(Exception):
    """Base class for recommendation pipeline errors"""


class EmbeddingFailure(RecommendationServiceError):
    """The embedding service call failed or returned unusable data"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class SearchFailure(RecommendationServiceError):
    """The vector search could not be completed or returned unusable data"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class MappingDefect(RecommendationServiceError):
    """A raw search match is structurally unusable"""

    def __init__(self, message: str, raw: Any = None):
        super().__init__(message)
        self.raw = raw


class RecommendationFailure(RecommendationServiceError):
    """
    Raised by the orchestrator when a pipeline stage fails.
    `stage` is "embedding" or "search"; `cause` is the stage failure.
    """

    def __init__(self, stage: str, cause: RecommendationServiceError):
        super().__init__(f"Recommendation failed at {stage} stage: {cause}")
        self.stage = stage
        self.cause = cause

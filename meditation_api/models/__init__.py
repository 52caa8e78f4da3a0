# Request/Response models
from .request_models import RecommendationRequest, DEFAULT_LIMIT
from .response_models import RecommendationResult, HealthResponse

# Stored document models
from .meditation_models import MeditationRecord

# Pipeline models
from .pipeline_models import RecommendationState

__all__ = [
    "RecommendationRequest",
    "DEFAULT_LIMIT",
    "RecommendationResult",
    "HealthResponse",
    "MeditationRecord",
    "RecommendationState",
]

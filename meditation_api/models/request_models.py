# Pydantic models for incoming API requests
from pydantic import BaseModel, Field

DEFAULT_LIMIT = 5


class RecommendationRequest(BaseModel):
    """
    Query parameters of GET /recommend.
    limit values below 1 are accepted here and normalized to 1 by the orchestrator.
    """
    keywords: str = Field(..., min_length=1, description="Free-text keywords to match")
    limit: int = Field(DEFAULT_LIMIT, description="Maximum number of recommendations")

# Pydantic models for outgoing API responses
from pydantic import BaseModel


class RecommendationResult(BaseModel):
    """Projection of a matched meditation returned to callers"""
    id: str
    name: str
    type: str


class HealthResponse(BaseModel):
    status: str = "healthy"
    message: str = "Service is running"

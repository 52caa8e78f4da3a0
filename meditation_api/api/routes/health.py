import logging

from fastapi import APIRouter

from meditation_api.models.response_models import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health_check():
    """Liveness only; downstream services are not checked"""
    logger.info("Health check endpoint called")
    return HealthResponse()

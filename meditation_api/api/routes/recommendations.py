import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from meditation_api.exceptions import RecommendationFailure
from meditation_api.models.request_models import RecommendationRequest
from meditation_api.models.response_models import RecommendationResult
from meditation_api.pipelines.orchestrator import RecommendationOrchestrator
from meditation_api.services.recommendation_service import get_recommendation_orchestrator

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/recommend",
    response_model=List[RecommendationResult],
    responses={204: {"description": "No matching meditations"}, 500: {"description": "Pipeline failure"}},
)
def recommend_meditations(
    request: Annotated[RecommendationRequest, Query()],
    orchestrator: RecommendationOrchestrator = Depends(get_recommendation_orchestrator),
):
    """
    Recommend meditations similar to the given keywords
    """
    keywords, limit = request.keywords, request.limit
    if not keywords.strip():
        raise HTTPException(status_code=422, detail="keywords must not be blank")

    logger.info(f"Recommendation request received for keywords: '{keywords}' with limit: {limit}")

    try:
        recommendations = orchestrator.recommend(keywords, limit)
    except RecommendationFailure as e:
        # Downstream detail stays in the logs, never in the response
        logger.exception(f"Recommendation failed at {e.stage} stage for keywords '{keywords}' "
                         f"(limit={limit}): {str(e.cause)}")
        raise HTTPException(status_code=500, detail="Internal server error")

    if not recommendations:
        logger.warning(f"No recommendations found for keywords: {keywords}")
        return Response(status_code=204)

    logger.info(f"Returning {len(recommendations)} recommendations for keywords: {keywords}")
    return recommendations

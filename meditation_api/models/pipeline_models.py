from typing import Any, Dict, List, Optional
from typing_extensions import TypedDict

from meditation_api.models.response_models import RecommendationResult


class RecommendationState(TypedDict, total=False):
    """
    State object for the keyword recommendation pipeline
    Compatible with LangGraph's state handling
    """
    # Input
    keywords: str
    limit: int

    # Pipeline data
    embedding: Optional[List[float]]
    raw_matches: Optional[List[Dict[str, Any]]]
    results: Optional[List[RecommendationResult]]

    # Pipeline metadata
    pipeline_step: str
    skipped_records: int

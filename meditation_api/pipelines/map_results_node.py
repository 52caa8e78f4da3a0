import logging

from meditation_api.exceptions import MappingDefect
from meditation_api.models.pipeline_models import RecommendationState
from meditation_api.services.result_mapper import to_result

logger = logging.getLogger(__name__)


def map_results_node(state: RecommendationState) -> dict:
    """
    Map raw matches to RecommendationResult in search order.
    Unusable matches are logged and skipped; the rest of the batch proceeds.
    """
    results = []
    skipped = 0

    for position, raw in enumerate(state.get("raw_matches") or []):
        try:
            results.append(to_result(raw))
        except MappingDefect as e:
            skipped += 1
            logger.warning(f"Skipping search match at position {position}: {str(e)}")

    limit = state["limit"]
    if len(results) > limit:
        logger.warning(f"Search returned {len(results)} results for limit {limit}, truncating")
        results = results[:limit]

    logger.info(f"Mapped {len(results)} results ({skipped} skipped)")
    return {"results": results, "skipped_records": skipped, "pipeline_step": "results_mapped"}

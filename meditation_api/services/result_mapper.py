"""
Maps raw vector-search matches into typed models.

Raw matches are loosely-typed documents (MongoDB documents or flattened
Qdrant payloads). Absent fields default to empty values so one partial
record never aborts a batch; only a match that is not a mapping at all is
rejected with MappingDefect.
"""
import logging
from collections.abc import Mapping
from numbers import Real
from typing import Any, List, Optional, Set

from meditation_api.exceptions import MappingDefect
from meditation_api.models.meditation_models import MeditationRecord
from meditation_api.models.response_models import RecommendationResult

logger = logging.getLogger(__name__)


def _require_mapping(raw: Any) -> Mapping:
    if not isinstance(raw, Mapping):
        raise MappingDefect(f"Search match must be a mapping, got: {type(raw).__name__}", raw=raw)
    return raw


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _identifier(raw: Mapping) -> str:
    # ObjectId, int and UUID ids are all rendered as strings
    value = raw.get("_id")
    if value is None:
        value = raw.get("id")
    return _as_text(value)


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    return float(value)


def _keywords(raw: Mapping) -> Set[str]:
    value = raw.get("keywords")
    if value is None:
        return set()
    if isinstance(value, str):
        return {value}
    try:
        return {_as_text(k) for k in value if k is not None}
    except TypeError:
        logger.warning(f"Ignoring non-iterable keywords on match {_identifier(raw)!r}")
        return set()


def _embedding(raw: Mapping, vector_field: str) -> List[float]:
    value = raw.get(vector_field)
    if not isinstance(value, (list, tuple)):
        return []
    floats = [_as_float(x) for x in value]
    if any(x is None for x in floats):
        logger.warning(f"Ignoring non-numeric embedding on match {_identifier(raw)!r}")
        return []
    return floats


def to_meditation_record(raw: Any, vector_field: str = "embedding") -> MeditationRecord:
    """Materialize a full MeditationRecord, including its stored vector."""
    raw = _require_mapping(raw)
    return MeditationRecord(
        id=_identifier(raw),
        name=_as_text(raw.get("name")),
        type=_as_text(raw.get("type")),
        keywords=_keywords(raw),
        embedding=_embedding(raw, vector_field),
        score=_as_float(raw.get("score")),
    )


def to_result(raw: Any) -> RecommendationResult:
    """Project a raw match onto the response DTO; any stored vector is ignored."""
    return record_to_result(to_meditation_record(raw))


def record_to_result(record: MeditationRecord) -> RecommendationResult:
    return RecommendationResult(id=record.id, name=record.name, type=record.type)

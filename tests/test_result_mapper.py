from bson import ObjectId
import pytest

from meditation_api.exceptions import MappingDefect
from meditation_api.models.response_models import RecommendationResult
from meditation_api.services.result_mapper import to_meditation_record, to_result


def test_to_result_projects_id_name_type():
    raw = {"_id": "m1", "name": "Morning calm", "type": "breathing",
           "keywords": ["calm"], "embedding": [0.1, 0.2]}

    assert to_result(raw) == RecommendationResult(id="m1", name="Morning calm", type="breathing")


def test_to_result_never_exposes_embedding():
    result = to_result({"_id": "m1", "embedding": [0.1, 0.2]})
    assert set(result.model_dump()) == {"id", "name", "type"}


def test_object_id_is_stringified():
    oid = ObjectId("65f1a2b3c4d5e6f708192a3b")
    assert to_result({"_id": oid}).id == "65f1a2b3c4d5e6f708192a3b"


def test_missing_fields_default_to_empty_values():
    record = to_meditation_record({"_id": "m2"})

    assert record.name == ""
    assert record.type == ""
    assert record.keywords == set()
    assert record.embedding == []
    assert record.score is None


def test_record_without_keywords_still_maps():
    assert to_result({"_id": "m3", "name": "Sleep", "type": "music"}).name == "Sleep"


def test_mixed_numeric_representations_become_floats():
    record = to_meditation_record({"_id": "m4", "embedding": [1, 0.5, 2], "score": 1})

    assert record.embedding == [1.0, 0.5, 2.0]
    assert all(type(x) is float for x in record.embedding)
    assert type(record.score) is float


def test_keywords_are_a_set():
    record = to_meditation_record({"_id": "m5", "keywords": ["calm", "sleep", "calm"]})
    assert record.keywords == {"calm", "sleep"}


def test_custom_vector_field():
    record = to_meditation_record({"_id": "m6", "vec": [3, 4]}, vector_field="vec")
    assert record.embedding == [3.0, 4.0]


@pytest.mark.parametrize("raw", [None, ["m1", "name"], "m1"])
def test_non_mapping_raises_mapping_defect(raw):
    with pytest.raises(MappingDefect):
        to_result(raw)

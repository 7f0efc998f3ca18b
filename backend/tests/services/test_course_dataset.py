"""Course Dataset — tests for loading and shape-checking the static JSON.

Tests cover:
    - Bundled dataset loads and yields valid courses
    - Missing file, malformed JSON, wrong root, missing 'courses' → CatalogDataError
    - Malformed records are kept raw (dropped later by the catalog)
    - Unhashable ids or slugs never crash the duplicate check
"""

import json

import pytest

from music_school.config import DEFAULT_COURSES_PATH
from music_school.core.catalog import valid_courses
from music_school.core.errors import CatalogDataError
from music_school.infrastructure.course_dataset import (
    load_course_records,
    parse_course_document,
)


def test_bundled_dataset_loads():
    records = load_course_records(DEFAULT_COURSES_PATH)
    courses = valid_courses(records)
    assert len(courses) == len(records) > 0
    assert len({c.id for c in courses}) == len(courses)
    assert len({c.slug for c in courses}) == len(courses)


def test_missing_file_raises(tmp_path):
    with pytest.raises(CatalogDataError) as exc_info:
        load_course_records(tmp_path / "nope.json")
    assert exc_info.value.http_status == 503


def test_malformed_json_raises(tmp_path):
    path = tmp_path / "courses.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogDataError):
        load_course_records(path)


@pytest.mark.parametrize("document", [[], "courses", {"courses": {}}, {"items": []}, None])
def test_wrong_shape_raises(document):
    with pytest.raises(CatalogDataError):
        parse_course_document(document)


def test_malformed_records_are_returned_raw(tmp_path):
    path = tmp_path / "courses.json"
    path.write_text(json.dumps({"courses": [{"id": 1}, {"title": "x"}]}), encoding="utf-8")
    records = load_course_records(path)
    assert len(records) == 2
    assert valid_courses(records) == ()


def test_error_response_hides_internal_path(tmp_path):
    with pytest.raises(CatalogDataError) as exc_info:
        load_course_records(tmp_path / "secret" / "nope.json")
    body = exc_info.value.to_response()
    assert "secret" not in body["error"]["message"]
    assert body["error"]["code"] == "CATALOG_DATA_ERROR"


def test_unhashable_id_is_dropped_not_raised(tmp_path):
    good = {
        "id": 1, "title": "Guitar Basics", "slug": "guitar-basics",
        "price": 99.99, "instructor": "John Doe", "image": "/img/guitar.jpg",
    }
    path = tmp_path / "courses.json"
    path.write_text(
        json.dumps({"courses": [good, {**good, "id": [1]}, {**good, "slug": {"x": 1}}]}),
        encoding="utf-8",
    )
    records = load_course_records(path)
    assert len(records) == 3
    assert [c.id for c in valid_courses(records)] == [1]

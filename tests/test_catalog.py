# tests/test_catalog.py
import json
import os

import pytest

from neurostep.models.question import InfoQuestion, MultipleChoiceQuestion, TextInputQuestion
from neurostep.services.catalog import CourseCatalog

TEST_COURSES_JSON = os.path.join(os.path.dirname(__file__), "..", "data", "test_courses.json")


@pytest.mark.engine
class TestCourseCatalog:
    def test_loads_valid_courses_in_order(self):
        catalog = CourseCatalog()
        catalog.load_courses(TEST_COURSES_JSON)
        course = catalog.get_course("mixed-201")
        assert course.title == "Mixed 201"
        assert [q.id for q in course.questions] == ["welcome", "capital", "gas", "salt"]
        assert isinstance(course.questions[0], InfoQuestion)
        assert isinstance(course.questions[1], MultipleChoiceQuestion)
        assert isinstance(course.questions[2], TextInputQuestion)
        assert course.questions[3].case_sensitive is True

    def test_skips_empty_and_invalid_courses(self):
        catalog = CourseCatalog()
        catalog.load_courses(TEST_COURSES_JSON)
        ids = {c.id for c in catalog.get_all_courses()}
        assert ids == {"basics-101", "mixed-201", "intro-only", "no-answer-key"}

    def test_unknown_course_is_none(self):
        catalog = CourseCatalog()
        catalog.load_courses(TEST_COURSES_JSON)
        assert catalog.get_course("does-not-exist") is None

    def test_missing_file_leaves_catalog_empty(self, tmp_path):
        catalog = CourseCatalog()
        catalog.load_courses(str(tmp_path / "missing.json"))
        assert catalog.get_all_courses() == []

    def test_malformed_json_leaves_catalog_empty(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        catalog = CourseCatalog()
        catalog.load_courses(str(path))
        assert catalog.get_all_courses() == []

    def test_reload_replaces_previous_courses(self, tmp_path):
        path = tmp_path / "one.json"
        path.write_text(json.dumps({
            "solo": {"title": "Solo", "questions": [{"id": "i", "kind": "info", "message": "hi"}]}
        }), encoding="utf-8")
        catalog = CourseCatalog()
        catalog.load_courses(TEST_COURSES_JSON)
        catalog.load_courses(str(path))
        assert [c.id for c in catalog.get_all_courses()] == ["solo"]

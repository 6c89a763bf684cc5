# tests/test_courses_api.py
import pytest
from fastapi.testclient import TestClient

@pytest.mark.api
class TestCoursesAPI:
    def test_get_all_courses(self, client: TestClient):
        response = client.get("/courses/")
        assert response.status_code == 200
        data = {c["id"]: c for c in response.json()}
        assert set(data) == {"basics-101", "mixed-201", "intro-only", "no-answer-key"}
        assert data["mixed-201"]["question_count"] == 4
        assert data["mixed-201"]["scorable_questions"] == 3

    def test_get_course_hides_answer_key(self, client: TestClient):
        response = client.get("/courses/mixed-201")
        assert response.status_code == 200
        questions = response.json()["questions"]
        assert [q["kind"] for q in questions] == ["info", "multiple-choice", "text-input", "text-input"]
        assert all("correct_answer" not in q for q in questions)
        assert questions[1]["options"] == ["Paris", "paris", "Lyon"]

    def test_get_course_not_found(self, client: TestClient):
        response = client.get("/courses/unknown-course")
        assert response.status_code == 404

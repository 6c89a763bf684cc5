# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
import os
import sys
import logging

# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, PROJECT_ROOT)

# --- Test storage and catalog, set before the engine is created on import ---
TEST_DB_PATH = os.path.join(PROJECT_ROOT, "test_neurostep.db")
TEST_COURSES_JSON = os.path.join(PROJECT_ROOT, "data", "test_courses.json")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["COURSE_CATALOG_PATH"] = TEST_COURSES_JSON
if os.path.exists(TEST_DB_PATH):
    os.remove(TEST_DB_PATH)

from neurostep.utils.config import settings
from neurostep.state_manager import quiz_sessions
from neurostep.services.catalog import course_catalog
from neurostep.services.progress import InMemoryProfileStore
from neurostep.services.quiz_session import QuizSession


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def tick(self, ms: int) -> None:
        self.now += ms


# --- Fixture to Point Settings at the Test Catalog ---
@pytest.fixture(scope="session", autouse=True)
def modify_settings_for_test_catalog():
    if not os.path.exists(TEST_COURSES_JSON):
        pytest.fail(f"Test course catalog not found at: {TEST_COURSES_JSON}")
    original_path = settings.course_catalog_path
    try:
        settings.course_catalog_path = TEST_COURSES_JSON
        course_catalog.load_courses(TEST_COURSES_JSON)
        logger.info(f"Using test course catalog '{TEST_COURSES_JSON}' for the session.")
        yield
    finally:
        settings.course_catalog_path = original_path


# --- TestClient Fixture ---
@pytest.fixture(scope="session")
def client(modify_settings_for_test_catalog):
    """
    Creates the TestClient after settings point at the test catalog and database.
    """
    from neurostep.main import app
    logger.info("Creating TestClient instance for the session.")
    with TestClient(app) as c:
        yield c
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)
        logger.info(f"Removed test database: {TEST_DB_PATH}")


# --- State Reset Fixture ---
@pytest.fixture(autouse=True)
def reset_quiz_sessions():
    quiz_sessions.clear()
    yield
    quiz_sessions.clear()


# --- Engine Fixtures ---
@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def profile_store():
    return InMemoryProfileStore()


@pytest.fixture
def make_session(clock, profile_store):
    """Builds a session for a test catalog course, sharing the clock and profile store."""
    def _make(course_id: str) -> QuizSession:
        course = course_catalog.get_course(course_id)
        assert course is not None, f"Test course '{course_id}' is not loaded"
        return QuizSession(course, profile_store, clock=clock)
    return _make

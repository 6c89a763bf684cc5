# neurostep/utils/config.py
import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load .env file before defining settings
load_dotenv()

class Settings(BaseSettings):
    # Storage
    database_url: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./neurostep.db")
    course_catalog_path: str = os.getenv("COURSE_CATALOG_PATH", "data/courses.json")

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_file: str | None = os.getenv("LOG_FILE")

    # Progress / XP rules
    xp_percentage_step: int = 10  # 1 XP per full 10% of a completed quiz
    completion_percentage: int = 100  # Percentage that counts a course as completed

    # Number of quiz attempts returned with a user profile
    recent_attempts_limit: int = 20

    # Upper bound on in-memory quiz sessions kept for (user, course) pairs
    max_quiz_sessions: int = 1000

settings = Settings()

# --- Validation of progress rules ---
if settings.xp_percentage_step <= 0:
    raise ValueError("XP_PERCENTAGE_STEP must be a positive integer")
if not 0 <= settings.completion_percentage <= 100:
    raise ValueError("COMPLETION_PERCENTAGE must be between 0 and 100")
if settings.max_quiz_sessions < 1:
    raise ValueError("MAX_QUIZ_SESSIONS must be at least 1")

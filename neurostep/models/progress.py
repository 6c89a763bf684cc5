# Data models for per-user course progress and aggregate statistics
# neurostep/models/progress.py
from pydantic import BaseModel, Field
from typing import Dict


class UserStats(BaseModel):
    total_xp: int = 0
    completed_courses: int = 0
    current_streak: int = 0  # Maintained outside the quiz engine


class ProfileSnapshot(BaseModel):
    """Persisted state of one user: course progress plus aggregate stats."""
    progress: Dict[str, int] = Field(default_factory=dict)
    stats: UserStats = Field(default_factory=UserStats)


class ProgressDelta(BaseModel):
    """What a single completed quiz changed in a user's profile."""
    course_id: str
    percentage: int
    xp_gained: int
    course_completed: bool
    stats: UserStats

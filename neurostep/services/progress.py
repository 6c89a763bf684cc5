# neurostep/services/progress.py
from typing import Dict, List, Optional, Protocol, Tuple

from neurostep.models.progress import ProfileSnapshot, ProgressDelta, UserStats
from neurostep.models.quiz import AttemptSummary
from neurostep.utils.config import settings
from neurostep.utils.logger import logger


class ProfileStore(Protocol):
    """
    Durable per-user storage the quiz session reports completions to.
    The attempt, when given, must be stored in the same unit of work as the progress.
    """

    async def apply_progress(
        self, course_id: str, percentage: int, attempt: Optional[AttemptSummary] = None
    ) -> ProgressDelta:
        ...


def xp_for_percentage(percentage: int) -> int:
    return percentage // settings.xp_percentage_step


def reduce_progress(
    progress: Dict[str, int],
    stats: UserStats,
    course_id: str,
    new_percentage: int,
) -> Tuple[Dict[str, int], UserStats]:
    """
    Folds one completed quiz into a user's progress map and stats.

    The course percentage is overwritten by the latest attempt, even when it
    is lower than before. Every completion at the completion percentage counts
    towards completed_courses, including repeats of an already completed
    course. XP is granted on every completion. The inputs are not modified.
    """
    if not 0 <= new_percentage <= 100:
        raise ValueError(f"Percentage must be between 0 and 100, got {new_percentage}")

    updated_progress = dict(progress)
    updated_progress[course_id] = new_percentage

    completed = new_percentage == settings.completion_percentage
    updated_stats = stats.model_copy(update={
        "total_xp": stats.total_xp + xp_for_percentage(new_percentage),
        "completed_courses": stats.completed_courses + (1 if completed else 0),
    })
    return updated_progress, updated_stats


def build_delta(course_id: str, percentage: int, before: UserStats, after: UserStats) -> ProgressDelta:
    return ProgressDelta(
        course_id=course_id,
        percentage=percentage,
        xp_gained=after.total_xp - before.total_xp,
        course_completed=after.completed_courses > before.completed_courses,
        stats=after,
    )


class InMemoryProfileStore:
    """Profile store keeping a single user's snapshot in memory."""

    def __init__(self, snapshot: ProfileSnapshot | None = None):
        self.snapshot = snapshot if snapshot is not None else ProfileSnapshot()
        self.attempts: List[AttemptSummary] = []

    async def apply_progress(
        self, course_id: str, percentage: int, attempt: Optional[AttemptSummary] = None
    ) -> ProgressDelta:
        before = self.snapshot.stats
        progress, stats = reduce_progress(self.snapshot.progress, before, course_id, percentage)
        self.snapshot = ProfileSnapshot(progress=progress, stats=stats)
        if attempt is not None:
            self.attempts.append(attempt)
        logger.debug(f"In-memory progress for '{course_id}' set to {percentage}%: {stats}")
        return build_delta(course_id, percentage, before, stats)

# neurostep/state_manager.py
from typing import Dict, Optional, Tuple
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException

from neurostep.models.user import User, CourseProgress, QuizAttempt
from neurostep.models.progress import ProfileSnapshot, ProgressDelta, UserStats
from neurostep.models.enums import SessionStatus
from neurostep.models.quiz import AttemptSummary
from neurostep.services.progress import reduce_progress, build_delta
from neurostep.services.quiz_session import QuizSession
from neurostep.utils.db import AsyncSessionLocal
from neurostep.utils.logger import logger
from neurostep.utils.config import settings


# In-memory quiz sessions, one per (user_id, course_id)
quiz_sessions: Dict[Tuple[str, str], QuizSession] = {}


def get_quiz_session(user_id: str, course_id: str) -> Optional[QuizSession]:
    return quiz_sessions.get((user_id, course_id))


def store_quiz_session(user_id: str, session: QuizSession) -> None:
    """
    Registers a session, discarding any earlier one for the same user and course.
    Past settings.max_quiz_sessions entries, completed sessions are evicted first,
    oldest first, then the oldest unfinished ones.
    """
    key = (user_id, session.course_id)
    if key in quiz_sessions:
        logger.info(f"Replacing quiz session for user '{user_id}' on course '{session.course_id}'.")
        del quiz_sessions[key]
    quiz_sessions[key] = session

    while len(quiz_sessions) > settings.max_quiz_sessions:
        victim = next(
            (k for k, s in quiz_sessions.items() if s.status == SessionStatus.COMPLETE),
            next(iter(quiz_sessions)),
        )
        logger.info(f"Evicting quiz session for user '{victim[0]}' on course '{victim[1]}'.")
        del quiz_sessions[victim]


async def get_user_or_create(session: AsyncSession, user_id: str) -> User:
    """
    Fetches a user from the DB or creates a new one and adds it to the session.
    The calling function is responsible for committing the transaction.
    """
    result = await session.execute(select(User).filter_by(id=user_id))
    user = result.scalars().first()
    if not user:
        logger.info(f"Adding new user '{user_id}' to session.")
        user = User(id=user_id, total_xp=0, completed_courses=0, current_streak=0)
        session.add(user)
    return user


def _stats_of(user: User) -> UserStats:
    return UserStats(
        total_xp=user.total_xp or 0,
        completed_courses=user.completed_courses or 0,
        current_streak=user.current_streak or 0,
    )


async def get_progress_rows(session: AsyncSession, user_id: str) -> Dict[str, CourseProgress]:
    result = await session.execute(select(CourseProgress).filter_by(user_id=user_id))
    return {row.course_id: row for row in result.scalars().all()}


async def get_profile_snapshot(session: AsyncSession, user_id: str) -> ProfileSnapshot:
    """Reads a user's progress map and stats; unknown users get an empty snapshot."""
    result = await session.execute(select(User).filter_by(id=user_id))
    user = result.scalars().first()
    if not user:
        return ProfileSnapshot()
    rows = await get_progress_rows(session, user_id)
    return ProfileSnapshot(
        progress={course_id: row.percentage for course_id, row in rows.items()},
        stats=_stats_of(user),
    )


async def apply_course_progress(session: AsyncSession, user_id: str, course_id: str, percentage: int) -> ProgressDelta:
    """
    Folds a completed quiz into the stored profile using the given session.
    The calling function is responsible for committing the transaction.
    """
    user = await get_user_or_create(session, user_id)
    rows = await get_progress_rows(session, user_id)
    before = _stats_of(user)

    progress = {cid: row.percentage for cid, row in rows.items()}
    _, after = reduce_progress(progress, before, course_id, percentage)

    row = rows.get(course_id)
    if row:
        row.percentage = percentage
    else:
        session.add(CourseProgress(user_id=user_id, course_id=course_id, percentage=percentage))

    user.total_xp = after.total_xp
    user.completed_courses = after.completed_courses
    await session.flush()

    logger.info(f"Progress for user '{user_id}' on '{course_id}' set to {percentage}%. Stats: {after}")
    return build_delta(course_id, percentage, before, after)


class DatabaseProfileStore:
    """Profile store for one user, committing each completion and its attempt record in one transaction."""

    def __init__(self, user_id: str, session_factory=AsyncSessionLocal):
        self.user_id = user_id
        self._session_factory = session_factory

    async def apply_progress(
        self, course_id: str, percentage: int, attempt: Optional[AttemptSummary] = None
    ) -> ProgressDelta:
        async with self._session_factory() as session:
            delta = await apply_course_progress(session, self.user_id, course_id, percentage)
            if attempt is not None:
                add_quiz_attempt(session, self.user_id, attempt, delta.xp_gained)
            await session.commit()
        return delta


def add_quiz_attempt(session: AsyncSession, user_id: str, attempt: AttemptSummary, xp_gained: int) -> QuizAttempt:
    """
    Adds a completed attempt to the user's quiz history.
    The calling function is responsible for committing the transaction.
    """
    row = QuizAttempt(
        user_id=user_id,
        course_id=attempt.course_id,
        started_at_ms=attempt.started_at_ms,
        ended_at_ms=attempt.ended_at_ms,
        score=attempt.score,
        scorable_questions=attempt.scorable_questions,
        percentage=attempt.percentage,
        xp_gained=xp_gained,
        average_response_ms=attempt.average_response_time,
    )
    session.add(row)
    return row


async def update_user_streak(session: AsyncSession, user_id: str, current_streak: int) -> UserStats:
    """Sets the externally maintained streak and commits it. XP and completions belong to the quiz engine."""
    user = await get_user_or_create(session, user_id)
    user.current_streak = current_streak
    await session.commit()
    logger.info(f"Streak for user '{user_id}' set to {current_streak}.")
    return _stats_of(user)


async def get_user_profile_with_session(session: AsyncSession, user_id: str) -> dict:
    """Retrieves a consolidated user profile using provided session."""
    result = await session.execute(
        select(User)
        .where(User.id == user_id)
        .options(
            selectinload(User.course_progress),
            selectinload(User.quiz_attempts)
        )
        .execution_options(populate_existing=True)
    )
    user = result.scalars().first()

    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    attempts = sorted(user.quiz_attempts, key=lambda a: (a.ended_at_ms or 0, a.id), reverse=True)
    attempt_data = [
        {
            "course_id": a.course_id,
            "started_at_ms": a.started_at_ms,
            "ended_at_ms": a.ended_at_ms,
            "score": a.score,
            "scorable_questions": a.scorable_questions,
            "percentage": a.percentage,
            "xp_gained": a.xp_gained,
            "average_response_ms": a.average_response_ms,
        }
        for a in attempts[:settings.recent_attempts_limit]
    ]

    return {
        "user_id": user.id,
        "created_at": user.created_at.isoformat(),
        "stats": _stats_of(user).model_dump(),
        "progress": {p.course_id: p.percentage for p in user.course_progress},
        "recent_attempts": attempt_data,
    }

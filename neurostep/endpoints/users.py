# neurostep/endpoints/users.py
from fastapi import APIRouter, Depends
from typing import List
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from neurostep.models.progress import ProfileSnapshot, UserStats
from neurostep.services.catalog import course_catalog
from neurostep.state_manager import (
    get_profile_snapshot,
    get_user_or_create,
    get_user_profile_with_session,
    update_user_streak,
)
from neurostep.utils.logger import logger
from neurostep.utils.db import get_db

router = APIRouter(
    tags=["Users"]
)

class UserCreate(BaseModel):
    user_id: str

class UserStatsUpdate(BaseModel):
    # XP and completed courses are written only by completed quizzes
    model_config = ConfigDict(extra="forbid")

    current_streak: int = Field(..., ge=0)

class CourseProgressView(BaseModel):
    course_id: str
    title: str
    description: str
    progress: int

@router.post("/", response_model=dict)
async def create_user(user_create: UserCreate, db: AsyncSession = Depends(get_db)):
    """
    Creates a new user with empty stats. If the user already exists,
    it returns the existing user's profile.
    """
    logger.debug(f"Attempting to create or fetch user: {user_create.user_id}")
    await get_user_or_create(db, user_create.user_id)
    await db.commit()
    return await get_user_profile_with_session(db, user_create.user_id)

@router.get("/{user_id}/profile", response_model=dict)
async def get_user_profile(user_id: str, db: AsyncSession = Depends(get_db)):
    """Stats, course progress and the latest quiz attempts of a user."""
    logger.debug(f"Fetching profile for user_id: {user_id}")
    return await get_user_profile_with_session(db, user_id)

@router.get("/{user_id}/progress", response_model=ProfileSnapshot)
async def get_user_progress(user_id: str, db: AsyncSession = Depends(get_db)):
    return await get_profile_snapshot(db, user_id)

@router.get("/{user_id}/courses", response_model=List[CourseProgressView])
async def get_user_courses(user_id: str, db: AsyncSession = Depends(get_db)):
    """Every catalog course with the user's latest completion percentage (0 if never completed)."""
    snapshot = await get_profile_snapshot(db, user_id)
    return [
        CourseProgressView(
            course_id=course.id,
            title=course.title,
            description=course.description,
            progress=round(snapshot.progress.get(course.id, 0)),
        )
        for course in course_catalog.get_all_courses()
    ]

@router.patch("/{user_id}/stats", response_model=UserStats)
async def patch_user_stats(user_id: str, stats_update: UserStatsUpdate, db: AsyncSession = Depends(get_db)):
    """Updates the streak kept by an external streak tracker; other stats fields are rejected with 422."""
    return await update_user_streak(db, user_id, stats_update.current_streak)

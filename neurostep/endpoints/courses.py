# Endpoints for browsing the course catalog

# neurostep/endpoints/courses.py
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import List

from neurostep.models.question import public_view
from neurostep.services.catalog import course_catalog
from neurostep.services.scoring import count_scorable

router = APIRouter()

class CourseSummary(BaseModel):
    id: str
    title: str
    description: str
    question_count: int
    scorable_questions: int

class CourseDetail(CourseSummary):
    questions: List[dict]

@router.get("/", response_model=List[CourseSummary])
async def get_all_courses():
    return [
        CourseSummary(
            id=course.id,
            title=course.title,
            description=course.description,
            question_count=len(course.questions),
            scorable_questions=count_scorable(course.questions),
        )
        for course in course_catalog.get_all_courses()
    ]

@router.get("/{course_id}", response_model=CourseDetail)
async def get_course(course_id: str):
    course = course_catalog.get_course(course_id)
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")
    return CourseDetail(
        id=course.id,
        title=course.title,
        description=course.description,
        question_count=len(course.questions),
        scorable_questions=count_scorable(course.questions),
        questions=[public_view(q) for q in course.questions],
    )

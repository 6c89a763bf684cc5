# neurostep/endpoints/quiz.py
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from neurostep.models.enums import SessionStatus
from neurostep.models.question import public_view
from neurostep.models.quiz import QuizMetrics, QuizResult
from neurostep.services.catalog import course_catalog
from neurostep.services.quiz_session import QuizSession, QuizStateError
from neurostep.state_manager import (
    DatabaseProfileStore,
    get_quiz_session,
    store_quiz_session,
)
from neurostep.utils.logger import logger

router = APIRouter()

class QuizRequest(BaseModel):
    user_id: str

class AnswerRequest(QuizRequest):
    answer: str

class AnswerResponse(BaseModel):
    accepted: bool
    correct: bool | None = None
    correct_answer: str | None = None
    response_time_ms: int | None = None
    score: int

class QuizStateResponse(BaseModel):
    course_id: str
    status: SessionStatus
    current_index: int
    question_number: int  # 1-based, for display
    total_questions: int
    scorable_questions: int
    score: int
    selected_answer: str | None = None
    is_last_question: bool
    question: dict | None = None  # None once the quiz is complete
    start_time: int | None = None
    end_time: int | None = None
    result: QuizResult | None = None


def _state_of(session: QuizSession) -> QuizStateResponse:
    active = session.status == SessionStatus.ACTIVE
    return QuizStateResponse(
        course_id=session.course_id,
        status=session.status,
        current_index=session.current_index,
        question_number=session.current_index + 1,
        total_questions=len(session.questions),
        scorable_questions=session.scorable_questions,
        score=session.score,
        selected_answer=session.selected_answer,
        is_last_question=session.is_last_question,
        question=public_view(session.current_question) if active else None,
        start_time=session.start_time,
        end_time=session.end_time,
        result=session.result,
    )


def _require_session(user_id: str, course_id: str) -> QuizSession:
    session = get_quiz_session(user_id, course_id)
    if not session:
        raise HTTPException(status_code=404, detail="No quiz session for this user and course")
    return session


@router.post("/{course_id}/start", response_model=QuizStateResponse)
async def start_quiz(course_id: str, request: QuizRequest):
    """Starts a new attempt, replacing any unfinished one for the same user and course."""
    course = course_catalog.get_course(course_id)
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")

    session = QuizSession(course, DatabaseProfileStore(request.user_id))
    session.init_quiz()
    store_quiz_session(request.user_id, session)
    return _state_of(session)


@router.get("/{course_id}/state", response_model=QuizStateResponse)
async def get_quiz_state(course_id: str, user_id: str):
    return _state_of(_require_session(user_id, course_id))


@router.post("/{course_id}/answer", response_model=AnswerResponse)
async def submit_answer(course_id: str, request: AnswerRequest):
    session = _require_session(request.user_id, course_id)
    try:
        outcome = session.select_answer(request.answer)
    except QuizStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if outcome is None:
        return AnswerResponse(accepted=False, score=session.score)
    return AnswerResponse(
        accepted=True,
        correct=outcome.correct,
        correct_answer=outcome.correct_answer,
        response_time_ms=outcome.response_time_ms,
        score=outcome.score,
    )


@router.post("/{course_id}/next", response_model=QuizStateResponse)
async def next_question(course_id: str, request: QuizRequest):
    """
    Advances to the next question. On the last one, completes the quiz and saves
    progress together with the attempt record; a request overlapping that save gets 409.
    """
    session = _require_session(request.user_id, course_id)
    try:
        result = await session.advance()
    except QuizStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if result is not None:
        logger.info(f"Recorded quiz attempt for user '{request.user_id}' on '{course_id}'.")
    return _state_of(session)


@router.post("/{course_id}/retry", response_model=QuizStateResponse)
async def retry_quiz(course_id: str, request: QuizRequest):
    session = _require_session(request.user_id, course_id)
    try:
        session.retry()
    except QuizStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _state_of(session)


@router.get("/{course_id}/metrics", response_model=QuizMetrics)
async def get_quiz_metrics(course_id: str, user_id: str):
    return _require_session(user_id, course_id).get_metrics()

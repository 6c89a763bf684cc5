# Data models produced by a quiz session (answers, metrics, results)
# neurostep/models/quiz.py
from pydantic import BaseModel
from typing import Dict

from neurostep.models.progress import ProgressDelta


class AnswerOutcome(BaseModel):
    question_id: str
    correct: bool | None = None  # None for info questions
    correct_answer: str | None = None
    response_time_ms: int
    score: int


class QuizMetrics(BaseModel):
    response_times: Dict[str, int]
    average_response_time: float


class AttemptSummary(BaseModel):
    """A finished attempt as handed to the profile store, before progress is applied."""
    course_id: str
    score: int
    scorable_questions: int
    percentage: int
    average_response_time: float
    started_at_ms: int
    ended_at_ms: int


class QuizResult(AttemptSummary):
    progress: ProgressDelta

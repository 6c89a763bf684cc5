# neurostep/services/quiz_session.py
import time
from typing import Callable, Optional

from neurostep.models.enums import SessionStatus
from neurostep.models.question import Course, Question
from neurostep.models.quiz import AnswerOutcome, AttemptSummary, QuizMetrics, QuizResult
from neurostep.services.metrics import MetricsRecorder
from neurostep.services.progress import ProfileStore
from neurostep.services.scoring import check_answer, completion_percentage, count_scorable
from neurostep.utils.logger import logger


def now_ms() -> int:
    """Wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class QuizStateError(RuntimeError):
    """Raised when a session operation is called in a state that does not allow it."""


class QuizSession:
    """
    One attempt at one course.

    The session walks the course's questions in order, scores answers,
    records how long each answer took, and reports the completion percentage
    to its profile store once the last question is passed. While that report
    is in flight every other operation is refused, so overlapping calls from
    an async caller cannot complete the same attempt twice. It is not
    thread-safe.
    """

    def __init__(self, course: Course, profile_store: ProfileStore, clock: Callable[[], int] = now_ms):
        if not course.questions:
            raise ValueError(f"Course '{course.id}' has no questions")
        self.course = course
        self.profile_store = profile_store
        self._clock = clock

        self.status = SessionStatus.IDLE
        self.current_index = 0
        self.selected_answer: Optional[str] = None
        self.score = 0
        self.metrics = MetricsRecorder()
        self.start_time: Optional[int] = None
        self.end_time: Optional[int] = None
        self.question_start_time: Optional[int] = None
        self.result: Optional[QuizResult] = None
        self._average_response_time: Optional[float] = None
        self._completing = False

    @property
    def course_id(self) -> str:
        return self.course.id

    @property
    def questions(self):
        return self.course.questions

    @property
    def current_question(self) -> Question:
        return self.questions[self.current_index]

    @property
    def is_last_question(self) -> bool:
        return self.current_index == len(self.questions) - 1

    @property
    def scorable_questions(self) -> int:
        return count_scorable(self.questions)

    def init_quiz(self) -> None:
        """Starts (or re-arms) the attempt at the first question."""
        if self._completing:
            raise QuizStateError("Cannot restart while the quiz is being completed")
        if self.status == SessionStatus.ACTIVE:
            logger.debug(f"Re-arming active quiz session for course '{self.course_id}'.")

        start = self._clock()
        # Each attempt must start strictly after the previous one
        if self.start_time is not None and start <= self.start_time:
            start = self.start_time + 1

        self.score = 0
        self.current_index = 0
        self.selected_answer = None
        self.metrics.reset()
        self.start_time = start
        self.end_time = None
        self.question_start_time = start
        self.result = None
        self._average_response_time = None
        self.status = SessionStatus.ACTIVE
        logger.info(f"Quiz started for course '{self.course_id}' ({len(self.questions)} questions).")

    def select_answer(self, answer: str) -> Optional[AnswerOutcome]:
        """
        Records the answer to the current question.
        Returns None without changing anything if the question was already answered.
        """
        self._require_active("select an answer")
        if self.selected_answer is not None:
            logger.debug(f"Ignoring repeated answer for question '{self.current_question.id}'.")
            return None

        question = self.current_question
        self.selected_answer = answer
        elapsed = self._clock() - self.question_start_time
        self.metrics.record_response(question.id, elapsed)

        is_correct = check_answer(question, answer)
        if is_correct:
            self.score += 1

        logger.debug(
            f"Answer for '{self.course_id}/{question.id}': correct={is_correct}, "
            f"elapsed={elapsed}ms, score={self.score}"
        )
        return AnswerOutcome(
            question_id=question.id,
            correct=is_correct,
            correct_answer=getattr(question, "correct_answer", None),
            response_time_ms=elapsed,
            score=self.score,
        )

    async def advance(self) -> Optional[QuizResult]:
        """
        Moves to the next question, or completes the quiz on the last one.
        On completion the percentage is applied to the profile store before
        the session is marked complete, and the result is returned.
        """
        self._require_active("advance")

        if not self.is_last_question:
            self.current_index += 1
            self.selected_answer = None
            self.question_start_time = self._clock()
            return None

        scorable = self.scorable_questions
        percentage = completion_percentage(self.score, scorable)
        summary = AttemptSummary(
            course_id=self.course_id,
            score=self.score,
            scorable_questions=scorable,
            percentage=percentage,
            average_response_time=self.metrics.summarize(),
            started_at_ms=self.start_time,
            ended_at_ms=self._clock(),
        )

        self._completing = True
        try:
            delta = await self.profile_store.apply_progress(self.course_id, percentage, attempt=summary)
        finally:
            self._completing = False

        self.end_time = summary.ended_at_ms
        self._average_response_time = summary.average_response_time
        self.result = QuizResult(**summary.model_dump(), progress=delta)
        self.status = SessionStatus.COMPLETE
        logger.info(
            f"Quiz complete for course '{self.course_id}': {self.score}/{scorable} "
            f"({percentage}%), +{delta.xp_gained} XP"
        )
        return self.result

    def retry(self) -> None:
        """Discards the current attempt and starts over."""
        if self.status == SessionStatus.IDLE:
            raise QuizStateError("Cannot retry a quiz that was never started")
        if self._completing:
            raise QuizStateError("Cannot retry while the quiz is being completed")
        self.init_quiz()

    def get_metrics(self) -> QuizMetrics:
        if self._average_response_time is not None:
            average = self._average_response_time
        else:
            average = self.metrics.summarize()
        return QuizMetrics(
            response_times=dict(self.metrics.response_times),
            average_response_time=average,
        )

    def _require_active(self, action: str) -> None:
        if self.status != SessionStatus.ACTIVE:
            raise QuizStateError(f"Cannot {action} while the quiz is {self.status.value}")
        if self._completing:
            raise QuizStateError(f"Cannot {action} while the quiz is being completed")

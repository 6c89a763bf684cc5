# Answer comparison and completion percentage for quiz sessions
# neurostep/services/scoring.py
from typing import Iterable, Optional

from neurostep.models.question import (
    InfoQuestion,
    MultipleChoiceQuestion,
    Question,
    TextInputQuestion,
)


def is_scorable(question: Question) -> bool:
    return not isinstance(question, InfoQuestion)


def count_scorable(questions: Iterable[Question]) -> int:
    return sum(1 for q in questions if is_scorable(q))


def check_answer(question: Question, answer: str) -> Optional[bool]:
    """
    Checks an answer against the question's answer key.

    Multiple-choice answers must match exactly. Text-input answers ignore case
    unless the question is flagged case sensitive. Info questions are not
    scored and return None. A scorable question without an answer key never
    matches.
    """
    if isinstance(question, InfoQuestion):
        return None

    if isinstance(question, MultipleChoiceQuestion):
        if question.correct_answer is None:
            return False
        return answer == question.correct_answer

    if isinstance(question, TextInputQuestion):
        if question.correct_answer is None:
            return False
        if question.case_sensitive:
            return answer == question.correct_answer
        return answer.lower() == question.correct_answer.lower()

    raise TypeError(f"Unsupported question type: {type(question).__name__}")


def completion_percentage(score: int, scorable: int) -> int:
    """Integer percentage of score over scorable, rounded half up. 0 when nothing is scorable."""
    if scorable <= 0:
        return 0
    # round(score / scorable * 100) with halves rounded up, in exact integer arithmetic
    return (200 * score + scorable) // (2 * scorable)

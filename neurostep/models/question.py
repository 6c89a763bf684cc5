# Data models for courses and their questions
# neurostep/models/question.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, List, Literal, Optional, Union


class QuestionBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    emoji: Optional[str] = None


class MultipleChoiceQuestion(QuestionBase):
    kind: Literal["multiple-choice"] = "multiple-choice"
    prompt: str
    options: List[str] = []
    correct_answer: Optional[str] = None


class TextInputQuestion(QuestionBase):
    kind: Literal["text-input"] = "text-input"
    prompt: str
    correct_answer: Optional[str] = None
    case_sensitive: bool = False
    placeholder: Optional[str] = None


class InfoQuestion(QuestionBase):
    kind: Literal["info"] = "info"
    message: str = ""


Question = Annotated[
    Union[MultipleChoiceQuestion, TextInputQuestion, InfoQuestion],
    Field(discriminator="kind"),
]


class Course(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    questions: List[Question]


def public_view(question: Question) -> dict:
    """Serializes a question for display, leaving out its answer key."""
    return question.model_dump(exclude={"correct_answer"}, exclude_none=True)

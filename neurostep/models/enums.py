# neurostep/models/enums.py
from enum import Enum

class QuestionKind(str, Enum):
    """The kinds of question a course can contain."""
    MULTIPLE_CHOICE = "multiple-choice"
    TEXT_INPUT = "text-input"
    INFO = "info"

class SessionStatus(str, Enum):
    """Lifecycle status of a quiz session."""
    IDLE = "idle"
    ACTIVE = "active"
    COMPLETE = "complete"

"""Problem catalog schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel

from practicehub.schemas.common import SuccessResponse


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class QuestionType(str, Enum):
    MCQ = "mcq"
    MSQ = "msq"
    NAT = "nat"


class OptionRead(BaseModel):
    text: str
    display_text: str | None = None
    is_correct: bool = False


class NatAnswerRead(BaseModel):
    correct_answer: float
    answer_text: str | None = None
    tolerance: float = 0.0
    answer_unit: str | None = None


class ProblemRead(BaseModel):
    """A practice problem as served by the API and consumed by analytics."""

    id: str
    subject: str
    topic: str
    title: str
    description: str | None = None
    difficulty: Difficulty
    question_type: QuestionType = QuestionType.MCQ
    options: list[OptionRead] = []
    nat_answer: NatAnswerRead | None = None
    is_active: bool = True
    created_at: datetime | None = None

    model_config = {"frozen": True}


class ProblemListResponse(SuccessResponse):
    """GET /api/problems and /api/problems/subject/{subject}"""

    problems: list[ProblemRead] = []
    total: int = 0

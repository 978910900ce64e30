"""Attempt schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from practicehub.schemas.common import SuccessResponse


class AttemptSubmit(BaseModel):
    """POST /api/problems/attempt — record one answer."""

    user_id: uuid.UUID
    problem_id: str = Field(min_length=1)
    selected_options: list[str] | None = None
    nat_answer_value: float | None = None
    nat_answer_text: str | None = None
    is_correct: bool
    score: float
    time_taken: int | None = Field(default=None, ge=0)  # seconds
    user_explanation: str | None = None


class AttemptRead(BaseModel):
    """Stored attempt row."""

    id: uuid.UUID
    user_id: uuid.UUID
    problem_id: str
    attempt_number: int
    selected_options: list[str] | None = None
    nat_answer_value: float | None = None
    nat_answer_text: str | None = None
    is_correct: bool
    score: float
    time_taken: int | None = None
    user_explanation: str | None = None
    attempted_at: datetime

    model_config = {"from_attributes": True}


class AttemptResponse(SuccessResponse):
    attempt: AttemptRead


class AttemptRecord(BaseModel):
    """An attempt as seen by the analytics engine.

    ``subject`` and ``topic`` are denormalised copies of the problem's
    classification so attempts can be filtered without a join.
    """

    problem_id: str
    subject: str | None = None
    topic: str | None = None
    score: int = Field(ge=0, le=1)
    attempted_at: datetime

    model_config = {"frozen": True}

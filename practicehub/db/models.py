"""SQLAlchemy ORM models for the practice platform.

Tables
------
- users                  – learner / educator profiles
- problems               – practice questions (subject → topic hierarchy)
- problem_options        – ordered options for MCQ / MSQ problems
- nat_answers            – numerical answer keys for NAT problems
- user_problem_attempts  – append-only history of answers per user & problem
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from practicehub.db.session import Base


# ── helpers ───────────────────────────────────────────────────────────────────


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _uuid() -> uuid.UUID:
    return uuid.uuid4()


# ── Enums (stored as VARCHAR via SQLAlchemy Enum) ─────────────────────────────


class DifficultyEnum(str, enum.Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class QuestionTypeEnum(str, enum.Enum):
    MCQ = "mcq"
    MSQ = "msq"
    NAT = "nat"


# ── Users ─────────────────────────────────────────────────────────────────────


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=_uuid
    )
    name: Mapped[str] = mapped_column(String(255))
    profile_name: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255))  # bcrypt hash
    user_type: Mapped[str] = mapped_column(String(50))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    attempts: Mapped[list["UserProblemAttempt"]] = relationship(back_populates="user")


# ── Problems ──────────────────────────────────────────────────────────────────


class Problem(Base):
    __tablename__ = "problems"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    subject: Mapped[str] = mapped_column(String(100), index=True)
    topic: Mapped[str] = mapped_column(String(200))
    title: Mapped[str] = mapped_column(String(500))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    difficulty: Mapped[DifficultyEnum] = mapped_column(
        Enum(DifficultyEnum, name="difficulty_enum", values_callable=lambda e: [m.value for m in e])
    )
    question_type: Mapped[QuestionTypeEnum] = mapped_column(
        Enum(QuestionTypeEnum, name="question_type_enum", values_callable=lambda e: [m.value for m in e]),
        default=QuestionTypeEnum.MCQ,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )

    options: Mapped[list["ProblemOption"]] = relationship(
        back_populates="problem",
        cascade="all, delete-orphan",
        order_by="ProblemOption.order_index",
    )
    nat_answer: Mapped["NatAnswer | None"] = relationship(
        back_populates="problem", uselist=False, cascade="all, delete-orphan"
    )


class ProblemOption(Base):
    __tablename__ = "problem_options"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=_uuid
    )
    problem_id: Mapped[str] = mapped_column(String(32), ForeignKey("problems.id"), index=True)
    option_text: Mapped[str] = mapped_column(Text)
    display_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_correct: Mapped[bool] = mapped_column(Boolean, default=False)
    order_index: Mapped[int] = mapped_column(Integer, default=0)

    problem: Mapped["Problem"] = relationship(back_populates="options")


class NatAnswer(Base):
    """Answer key for a numerical-answer-type problem."""

    __tablename__ = "nat_answers"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=_uuid
    )
    problem_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("problems.id"), unique=True
    )
    correct_answer: Mapped[float] = mapped_column(Float)
    answer_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    tolerance: Mapped[float] = mapped_column(Float, default=0.0)
    answer_unit: Mapped[str | None] = mapped_column(String(50), nullable=True)

    problem: Mapped["Problem"] = relationship(back_populates="nat_answer")


# ── Attempts ──────────────────────────────────────────────────────────────────


class UserProblemAttempt(Base):
    """One submitted answer. Never updated after insert."""

    __tablename__ = "user_problem_attempts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=_uuid
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), index=True
    )
    problem_id: Mapped[str] = mapped_column(String(32), ForeignKey("problems.id"), index=True)
    attempt_number: Mapped[int] = mapped_column(Integer, default=1)
    selected_options: Mapped[list | None] = mapped_column(JSON, nullable=True)
    nat_answer_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    nat_answer_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_correct: Mapped[bool] = mapped_column(Boolean)
    score: Mapped[float] = mapped_column(Float, default=0.0)
    time_taken: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds
    user_explanation: Mapped[str | None] = mapped_column(Text, nullable=True)
    attempted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, index=True
    )

    user: Mapped["User"] = relationship(back_populates="attempts")
    problem: Mapped["Problem"] = relationship("Problem")

"""Where the analytics engine gets its problems and attempts from.

``ProgressTracker`` is built with one ``ProblemSource`` and one
``AttemptSource``. Swapping sources switches between fixtures, the synthetic
catalog, the database and a remote API without touching the engine.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Protocol, Sequence

from sqlalchemy.orm import Session, selectinload

from practicehub.db.models import Problem, UserProblemAttempt
from practicehub.schemas.attempt import AttemptRecord
from practicehub.schemas.problem import NatAnswerRead, OptionRead, ProblemRead
from practicehub.schemas.progress import AnalyticsReport, ProgressSnapshot
from practicehub.services.analytics import (
    RECENT_ACTIVITY_LIMIT,
    InsightThresholds,
    ProgressAnalytics,
)
from practicehub.services.catalog import generate_catalog
from practicehub.services.simulator import simulate_progress

logger = logging.getLogger(__name__)


class ProblemSource(Protocol):
    def load_problems(self) -> list[ProblemRead]: ...


class AttemptSource(Protocol):
    def load_attempts(self) -> list[AttemptRecord]: ...


# ── ORM → schema ──────────────────────────────────────────────────────────────


def problem_to_schema(problem: Problem) -> ProblemRead:
    """Flatten a Problem row (with options / NAT answer) into ProblemRead."""
    nat = problem.nat_answer
    return ProblemRead(
        id=problem.id,
        subject=problem.subject,
        topic=problem.topic,
        title=problem.title,
        description=problem.description,
        difficulty=problem.difficulty.value,
        question_type=problem.question_type.value,
        options=[
            OptionRead(
                text=o.option_text,
                display_text=o.display_text,
                is_correct=o.is_correct,
            )
            for o in problem.options
        ],
        nat_answer=(
            NatAnswerRead(
                correct_answer=nat.correct_answer,
                answer_text=nat.answer_text,
                tolerance=nat.tolerance,
                answer_unit=nat.answer_unit,
            )
            if nat is not None
            else None
        ),
        is_active=problem.is_active,
        created_at=problem.created_at,
    )


def attempt_to_record(attempt: UserProblemAttempt) -> AttemptRecord:
    problem = attempt.problem
    attempted_at = attempt.attempted_at
    if attempted_at.tzinfo is None:
        attempted_at = attempted_at.replace(tzinfo=timezone.utc)
    return AttemptRecord(
        problem_id=attempt.problem_id,
        subject=problem.subject if problem else None,
        topic=problem.topic if problem else None,
        score=1 if attempt.is_correct else 0,
        attempted_at=attempted_at,
    )


# ── implementations ───────────────────────────────────────────────────────────


class StaticSource:
    """Fixed collections, e.g. test fixtures."""

    def __init__(
        self,
        problems: Sequence[ProblemRead] = (),
        attempts: Sequence[AttemptRecord] = (),
    ) -> None:
        self._problems = list(problems)
        self._attempts = list(attempts)

    def load_problems(self) -> list[ProblemRead]:
        return list(self._problems)

    def load_attempts(self) -> list[AttemptRecord]:
        return list(self._attempts)


class SimulatedSource:
    """Synthetic catalog plus a simulated attempt history.

    Each ``load_attempts`` call re-runs the simulator; with a *seed* every
    run is identical.
    """

    def __init__(self, seed: int | None = None, now: datetime | None = None) -> None:
        self.seed = seed
        self.now = now

    def load_problems(self) -> list[ProblemRead]:
        return generate_catalog()

    def load_attempts(self) -> list[AttemptRecord]:
        snapshot = simulate_progress(self.load_problems(), seed=self.seed, now=self.now)
        return snapshot.completed_problems


class DatabaseSource:
    """Active problems and one user's attempts, read through SQLAlchemy."""

    def __init__(self, db: Session, user_id: uuid.UUID) -> None:
        self.db = db
        self.user_id = user_id

    def load_problems(self) -> list[ProblemRead]:
        rows = (
            self.db.query(Problem)
            .options(selectinload(Problem.options), selectinload(Problem.nat_answer))
            .filter(Problem.is_active.is_(True))
            .order_by(Problem.id)
            .all()
        )
        return [problem_to_schema(p) for p in rows]

    def load_attempts(self) -> list[AttemptRecord]:
        rows = (
            self.db.query(UserProblemAttempt)
            .options(selectinload(UserProblemAttempt.problem))
            .filter(UserProblemAttempt.user_id == self.user_id)
            .order_by(UserProblemAttempt.attempted_at)
            .all()
        )
        return [attempt_to_record(a) for a in rows]


# ── tracker ───────────────────────────────────────────────────────────────────


class ProgressTracker:
    """Holds the latest snapshot loaded from its sources.

    ``refresh()`` replaces the snapshot wholesale; there is no incremental
    update path. Failures from a source propagate to the caller and leave the
    previous snapshot in place.
    """

    def __init__(self, problem_source: ProblemSource, attempt_source: AttemptSource) -> None:
        self.problem_source = problem_source
        self.attempt_source = attempt_source
        self.problems: list[ProblemRead] = []
        self.snapshot = ProgressSnapshot()

    def refresh(self) -> ProgressSnapshot:
        problems = self.problem_source.load_problems()
        attempts = self.attempt_source.load_attempts()
        self.problems = problems
        self.snapshot = ProgressSnapshot(
            completed_problems=attempts, total_problems=len(problems)
        )
        logger.debug(
            "Progress refreshed: %d problems, %d attempts", len(problems), len(attempts)
        )
        return self.snapshot

    def analytics(self) -> ProgressAnalytics:
        return ProgressAnalytics(self.problems, self.snapshot.completed_problems)

    def report(
        self,
        thresholds: InsightThresholds | None = None,
        recent_limit: int = RECENT_ACTIVITY_LIMIT,
    ) -> AnalyticsReport:
        return self.analytics().build_report(thresholds, recent_limit)

"""Progress & analytics routes."""

import logging
import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy import case, func
from sqlalchemy.orm import Session, selectinload

from practicehub.config import settings
from practicehub.db.models import Problem, UserProblemAttempt
from practicehub.db.session import get_db
from practicehub.schemas.progress import (
    AnalyticsResponse,
    CompletedProblem,
    ProgressResponse,
    TopicSummary,
)
from practicehub.services.analytics import InsightThresholds
from practicehub.services.sources import DatabaseSource, ProgressTracker, SimulatedSource

logger = logging.getLogger(__name__)
router = APIRouter()
analytics_router = APIRouter()


def _topic_summaries(db: Session, user_id: uuid.UUID) -> list[TopicSummary]:
    correct = func.sum(case((UserProblemAttempt.is_correct.is_(True), 1), else_=0))
    rows = (
        db.query(
            Problem.subject,
            Problem.topic,
            func.count(func.distinct(UserProblemAttempt.problem_id)),
            func.count(UserProblemAttempt.id),
            correct,
            func.max(UserProblemAttempt.attempted_at),
        )
        .join(Problem, Problem.id == UserProblemAttempt.problem_id)
        .filter(UserProblemAttempt.user_id == user_id)
        .group_by(Problem.subject, Problem.topic)
        .order_by(Problem.subject, Problem.topic)
        .all()
    )
    return [
        TopicSummary(
            subject=subject,
            topic=topic,
            problems_attempted=attempted,
            total_attempts=total,
            correct_attempts=n_correct or 0,
            accuracy=round((n_correct or 0) / total * 100, 2) if total else 0.0,
            last_attempted_at=last,
        )
        for subject, topic, attempted, total, n_correct, last in rows
    ]


@router.get("/{user_id}", response_model=ProgressResponse)
def get_progress(user_id: uuid.UUID, db: Session = Depends(get_db)):
    """Per-topic rollup plus every attempt, newest first.

    An unknown user simply has no attempts.
    """
    attempts = (
        db.query(UserProblemAttempt)
        .options(selectinload(UserProblemAttempt.problem))
        .filter(UserProblemAttempt.user_id == user_id)
        .order_by(UserProblemAttempt.attempted_at.desc())
        .all()
    )

    completed = [
        CompletedProblem(
            id=a.problem_id,
            subject=a.problem.subject if a.problem else None,
            topic=a.problem.topic if a.problem else None,
            title=a.problem.title if a.problem else None,
            difficulty=a.problem.difficulty.value if a.problem else None,
            score=a.score,
            is_correct=a.is_correct,
            attempted_at=a.attempted_at,
            attempt_number=a.attempt_number,
        )
        for a in attempts
    ]

    return ProgressResponse(
        progress_summary=_topic_summaries(db, user_id),
        completed_problems=completed,
        total_attempts=len(attempts),
    )


# ── Analytics ─────────────────────────────────────────────────────────────────


@analytics_router.get("/simulated", response_model=AnalyticsResponse)
def simulated_analytics(seed: int | None = Query(default=None)):
    """Analytics over the synthetic catalog and a simulated history."""
    if seed is None:
        seed = settings.SIMULATION_SEED
    source = SimulatedSource(seed=seed)
    tracker = ProgressTracker(source, source)
    tracker.refresh()
    report = tracker.report(InsightThresholds.from_settings(), settings.RECENT_ACTIVITY_LIMIT)
    return AnalyticsResponse(report=report)


@analytics_router.get("/{user_id}", response_model=AnalyticsResponse)
def user_analytics(user_id: uuid.UUID, db: Session = Depends(get_db)):
    """Analytics over the active catalog and *user_id*'s stored attempts."""
    source = DatabaseSource(db, user_id)
    tracker = ProgressTracker(source, source)
    tracker.refresh()
    report = tracker.report(InsightThresholds.from_settings(), settings.RECENT_ACTIVITY_LIMIT)
    logger.info(
        "Analytics for %s: %.1f%% complete, %.1f%% accurate",
        user_id,
        report.overall_completion,
        report.overall_accuracy,
    )
    return AnalyticsResponse(report=report)

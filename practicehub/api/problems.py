"""Problem retrieval and attempt submission routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from practicehub.db.models import Problem, User, UserProblemAttempt
from practicehub.db.session import get_db
from practicehub.schemas.attempt import AttemptRead, AttemptResponse, AttemptSubmit
from practicehub.schemas.problem import ProblemListResponse
from practicehub.services.sources import problem_to_schema

logger = logging.getLogger(__name__)
router = APIRouter()


def _active_problems(db: Session):
    return (
        db.query(Problem)
        .options(selectinload(Problem.options), selectinload(Problem.nat_answer))
        .filter(Problem.is_active.is_(True))
        .order_by(Problem.created_at.desc(), Problem.id)
    )


@router.get("", response_model=ProblemListResponse)
def list_problems(db: Session = Depends(get_db)):
    """All active problems, newest first, with options or NAT answer attached."""
    problems = [problem_to_schema(p) for p in _active_problems(db).all()]
    logger.info("Fetched %d problems", len(problems))
    return ProblemListResponse(problems=problems, total=len(problems))


@router.get("/subject/{subject}", response_model=ProblemListResponse)
def list_problems_by_subject(subject: str, db: Session = Depends(get_db)):
    problems = [
        problem_to_schema(p)
        for p in _active_problems(db).filter(Problem.subject == subject).all()
    ]
    return ProblemListResponse(problems=problems, total=len(problems))


@router.post("/attempt", response_model=AttemptResponse, status_code=status.HTTP_201_CREATED)
def submit_attempt(body: AttemptSubmit, db: Session = Depends(get_db)):
    """Record one answer and number it per (user, problem).

    The attempt number is read-then-incremented without a lock, so two
    concurrent submissions for the same user and problem can get the same
    number.
    """
    if db.get(User, body.user_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if db.get(Problem, body.problem_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Problem not found")

    last_number = (
        db.query(func.max(UserProblemAttempt.attempt_number))
        .filter(
            UserProblemAttempt.user_id == body.user_id,
            UserProblemAttempt.problem_id == body.problem_id,
        )
        .scalar()
    )

    attempt = UserProblemAttempt(
        user_id=body.user_id,
        problem_id=body.problem_id,
        attempt_number=(last_number or 0) + 1,
        selected_options=body.selected_options,
        nat_answer_value=body.nat_answer_value,
        nat_answer_text=body.nat_answer_text,
        is_correct=body.is_correct,
        score=body.score,
        time_taken=body.time_taken,
        user_explanation=body.user_explanation,
    )
    db.add(attempt)
    db.commit()
    db.refresh(attempt)

    logger.info(
        "Attempt %d saved for user %s, problem %s",
        attempt.attempt_number,
        body.user_id,
        body.problem_id,
    )
    return AttemptResponse(
        message="Attempt saved successfully",
        attempt=AttemptRead.model_validate(attempt),
    )

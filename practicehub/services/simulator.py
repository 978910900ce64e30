"""Synthetic attempt history over a problem catalog."""

import logging
import math
import random
from datetime import datetime, timedelta, timezone
from typing import Sequence

from practicehub.schemas.attempt import AttemptRecord
from practicehub.schemas.problem import ProblemRead
from practicehub.schemas.progress import ProgressSnapshot

logger = logging.getLogger(__name__)

COMPLETION_RATIO = 0.3
ACCURACY = 0.7
WINDOW_DAYS = 30


def simulate_progress(
    problems: Sequence[ProblemRead],
    rng: random.Random | None = None,
    *,
    seed: int | None = None,
    now: datetime | None = None,
    completion_ratio: float = COMPLETION_RATIO,
    accuracy: float = ACCURACY,
    window_days: int = WINDOW_DAYS,
) -> ProgressSnapshot:
    """Mark the first ``floor(completion_ratio × N)`` problems as completed.

    Each completed problem scores 1 with probability *accuracy* and is dated
    uniformly within the last *window_days* before *now*. Pass *rng* or
    *seed* for reproducible output; with neither, results vary per call.
    """
    if rng is None:
        rng = random.Random(seed)
    if now is None:
        now = datetime.now(timezone.utc)

    window = timedelta(days=window_days)
    n_completed = math.floor(len(problems) * completion_ratio)

    completed: list[AttemptRecord] = []
    for problem in problems[:n_completed]:
        completed.append(
            AttemptRecord(
                problem_id=problem.id,
                subject=problem.subject,
                topic=problem.topic,
                score=1 if rng.random() < accuracy else 0,
                attempted_at=now - rng.random() * window,
            )
        )

    logger.debug("Simulated %d attempts over %d problems", len(completed), len(problems))
    return ProgressSnapshot(completed_problems=completed, total_problems=len(problems))

"""Progress analytics over a problem catalog and an attempt history.

Everything here is a pure computation over its inputs: no I/O, no caching,
no state carried between calls. The same (problems, attempts) always yields
the same report.

Definitions
-----------
completion  – distinct attempted problems / problems in scope × 100 (capped at 100)
accuracy    – mean attempt score in scope × 100
Both are 0 when their denominator is empty.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Sequence

from practicehub.config import settings
from practicehub.schemas.attempt import AttemptRecord
from practicehub.schemas.problem import Difficulty, ProblemRead
from practicehub.schemas.progress import (
    AnalyticsReport,
    PerformanceInsights,
    RecentActivity,
    SubjectStats,
    Suggestion,
    TopicInsight,
    TopicStats,
)

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_LIMIT = 5


@dataclass(frozen=True)
class InsightThresholds:
    """Percent cut-offs used to classify topics and subjects."""

    low_accuracy: float = 60.0
    high_accuracy: float = 80.0
    low_completion: float = 30.0

    @classmethod
    def from_settings(cls) -> "InsightThresholds":
        return cls(
            low_accuracy=settings.LOW_ACCURACY_THRESHOLD,
            high_accuracy=settings.HIGH_ACCURACY_THRESHOLD,
            low_completion=settings.LOW_COMPLETION_THRESHOLD,
        )


# ── helpers ───────────────────────────────────────────────────────────────────


def percentage(part: float, whole: float) -> float:
    if not whole:
        return 0.0
    return min(part / whole * 100, 100.0)


def _accuracy(attempts: Sequence[AttemptRecord]) -> float:
    return percentage(sum(a.score for a in attempts), len(attempts))


def _distinct_problems(attempts: Iterable[AttemptRecord]) -> int:
    return len({a.problem_id for a in attempts})


def _as_utc(ts: datetime) -> datetime:
    # naive timestamps (e.g. from SQLite) are treated as UTC
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


class ProblemIndex:
    """Problems keyed by id. Lookups of unknown ids return None."""

    def __init__(self, problems: Iterable[ProblemRead]) -> None:
        self._by_id: dict[str, ProblemRead] = {p.id: p for p in problems}

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, problem_id: object) -> bool:
        return problem_id in self._by_id

    def get(self, problem_id: str) -> ProblemRead | None:
        return self._by_id.get(problem_id)

    def unresolved(self, attempts: Iterable[AttemptRecord]) -> list[str]:
        """Distinct attempt problem ids with no matching problem, first-seen order."""
        seen: dict[str, None] = {}
        for a in attempts:
            if a.problem_id not in self._by_id:
                seen.setdefault(a.problem_id)
        return list(seen)


# ── engine ────────────────────────────────────────────────────────────────────


class ProgressAnalytics:
    """Derived statistics for one (problems, attempts) pair.

    Inputs are copied into tuples on construction; every method is a pure
    function of them.
    """

    def __init__(
        self,
        problems: Sequence[ProblemRead],
        attempts: Sequence[AttemptRecord],
        subjects: Sequence[str] | None = None,
    ) -> None:
        self.problems: tuple[ProblemRead, ...] = tuple(problems)
        self.attempts: tuple[AttemptRecord, ...] = tuple(attempts)
        self.index = ProblemIndex(self.problems)
        if subjects is None:
            subjects = list(dict.fromkeys(p.subject for p in self.problems))
        self.subjects: tuple[str, ...] = tuple(subjects)

    # ── overall ───────────────────────────────────────────────────────────

    def overall_completion(self) -> float:
        return percentage(_distinct_problems(self.attempts), len(self.problems))

    def overall_accuracy(self) -> float:
        return _accuracy(self.attempts)

    # ── per subject ───────────────────────────────────────────────────────

    def subject_progress(self, subject: str) -> SubjectStats:
        """Scoped by the subject tag carried on each problem and attempt."""
        total = sum(1 for p in self.problems if p.subject == subject)
        scoped = [a for a in self.attempts if a.subject == subject]
        completed = _distinct_problems(scoped)
        return SubjectStats(
            subject=subject,
            completion=percentage(completed, total),
            accuracy=_accuracy(scoped),
            total=total,
            completed=completed,
        )

    def subjects_progress(self) -> list[SubjectStats]:
        return [self.subject_progress(s) for s in self.subjects]

    # ── per topic ─────────────────────────────────────────────────────────

    def topic_analysis(self) -> list[TopicStats]:
        """One entry per (subject, topic) present in the catalog, catalog order.

        Attempts are assigned to topics through the problem they reference,
        so attempts with unknown problem ids never count towards a topic.
        ``average_attempts`` is attempts per distinct completed problem.
        """
        totals: dict[tuple[str, str], int] = {}
        for p in self.problems:
            key = (p.subject, p.topic)
            totals[key] = totals.get(key, 0) + 1

        by_topic: dict[tuple[str, str], list[AttemptRecord]] = {k: [] for k in totals}
        for a in self.attempts:
            problem = self.index.get(a.problem_id)
            if problem is not None:
                by_topic[(problem.subject, problem.topic)].append(a)

        out: list[TopicStats] = []
        for (subject, topic), total in totals.items():
            scoped = by_topic[(subject, topic)]
            completed = _distinct_problems(scoped)
            out.append(
                TopicStats(
                    topic=topic,
                    subject=subject,
                    completion=percentage(completed, total),
                    accuracy=_accuracy(scoped),
                    total=total,
                    completed=completed,
                    average_attempts=len(scoped) / completed if completed else 0.0,
                )
            )
        return out

    # ── difficulty / recency ──────────────────────────────────────────────

    def difficulty_stats(self) -> dict[Difficulty, int]:
        stats = {d: 0 for d in Difficulty}
        for a in self.attempts:
            problem = self.index.get(a.problem_id)
            if problem is not None:
                stats[problem.difficulty] += 1
        return stats

    def recent_activity(self, limit: int = RECENT_ACTIVITY_LIMIT) -> list[RecentActivity]:
        ordered = sorted(self.attempts, key=lambda a: _as_utc(a.attempted_at), reverse=True)
        return [
            RecentActivity(attempt=a, problem_details=self.index.get(a.problem_id))
            for a in ordered[:limit]
        ]

    # ── insights ──────────────────────────────────────────────────────────

    def performance_insights(
        self, thresholds: InsightThresholds | None = None
    ) -> PerformanceInsights:
        t = thresholds or InsightThresholds()
        topics = self.topic_analysis()
        insights = PerformanceInsights()

        for ts in topics:
            if ts.completion <= 0:
                continue
            if ts.accuracy < t.low_accuracy:
                insights.needs_improvement.append(
                    TopicInsight(
                        **ts.model_dump(),
                        reason="Low accuracy",
                        suggestion=(
                            f"Review the concepts in {ts.topic} as your accuracy "
                            f"is below {t.low_accuracy:g}%"
                        ),
                    )
                )
            elif ts.accuracy > t.high_accuracy:
                insights.good_progress.append(
                    TopicInsight(
                        **ts.model_dump(),
                        reason="High accuracy",
                        suggestion="Keep up the good work!",
                    )
                )

        unattempted = [ts for ts in topics if ts.completion == 0]
        if unattempted:
            insights.suggestions.append(
                Suggestion(
                    type="unattempted",
                    topics=unattempted,
                    suggestion="Start practicing these topics to improve your overall performance",
                )
            )

        low_completion = [ts for ts in topics if 0 < ts.completion < t.low_completion]
        if low_completion:
            insights.suggestions.append(
                Suggestion(
                    type="low_completion",
                    topics=low_completion,
                    suggestion="Try to complete more problems in these topics",
                )
            )

        weak_subjects = [
            s for s in self.subjects_progress()
            if s.accuracy < t.low_accuracy and s.completion > 0
        ]
        if weak_subjects:
            insights.suggestions.append(
                Suggestion(
                    type="subject_improvement",
                    subjects=weak_subjects,
                    suggestion="Focus on improving your performance in these subjects",
                )
            )

        return insights

    # ── everything ────────────────────────────────────────────────────────

    def build_report(
        self,
        thresholds: InsightThresholds | None = None,
        recent_limit: int = RECENT_ACTIVITY_LIMIT,
    ) -> AnalyticsReport:
        unresolved = self.index.unresolved(self.attempts)
        if unresolved:
            logger.warning(
                "%d attempted problem id(s) not found in catalog: %s",
                len(unresolved),
                ", ".join(unresolved[:10]),
            )
        return AnalyticsReport(
            overall_completion=self.overall_completion(),
            overall_accuracy=self.overall_accuracy(),
            total_problems=len(self.problems),
            completed_problems=_distinct_problems(self.attempts),
            subjects=self.subjects_progress(),
            topics=self.topic_analysis(),
            difficulty=self.difficulty_stats(),
            recent_activity=self.recent_activity(recent_limit),
            insights=self.performance_insights(thresholds),
            unresolved_problem_ids=unresolved,
        )


def build_report(
    problems: Sequence[ProblemRead],
    attempts: Sequence[AttemptRecord],
    thresholds: InsightThresholds | None = None,
    recent_limit: int = RECENT_ACTIVITY_LIMIT,
) -> AnalyticsReport:
    """Shortcut for ``ProgressAnalytics(problems, attempts).build_report(...)``."""
    return ProgressAnalytics(problems, attempts).build_report(thresholds, recent_limit)

"""Progress / analytics schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from practicehub.schemas.attempt import AttemptRecord
from practicehub.schemas.common import SuccessResponse
from practicehub.schemas.problem import Difficulty, ProblemRead


# ── Raw progress (GET /api/progress/{user_id}) ────────────────────────────────


class TopicSummary(BaseModel):
    """Per (subject, topic) rollup computed in SQL."""

    subject: str
    topic: str
    problems_attempted: int
    total_attempts: int
    correct_attempts: int
    accuracy: float
    last_attempted_at: datetime | None = None


class CompletedProblem(BaseModel):
    """One attempt joined with its problem's metadata."""

    id: str
    subject: str | None = None
    topic: str | None = None
    title: str | None = None
    difficulty: Difficulty | None = None
    score: float
    is_correct: bool
    attempted_at: datetime
    attempt_number: int


class ProgressResponse(SuccessResponse):
    progress_summary: list[TopicSummary] = []
    completed_problems: list[CompletedProblem] = []
    total_attempts: int = 0


# ── Analytics views ───────────────────────────────────────────────────────────


class ProgressSnapshot(BaseModel):
    completed_problems: list[AttemptRecord] = []
    total_problems: int = 0


class SubjectStats(BaseModel):
    subject: str
    completion: float
    accuracy: float
    total: int
    completed: int


class TopicStats(BaseModel):
    topic: str
    subject: str
    completion: float
    accuracy: float
    total: int
    completed: int
    average_attempts: float


class TopicInsight(TopicStats):
    reason: str
    suggestion: str


class Suggestion(BaseModel):
    type: Literal["unattempted", "low_completion", "subject_improvement"]
    suggestion: str
    topics: list[TopicStats] = []
    subjects: list[SubjectStats] = []


class PerformanceInsights(BaseModel):
    needs_improvement: list[TopicInsight] = []
    good_progress: list[TopicInsight] = []
    suggestions: list[Suggestion] = []


class RecentActivity(BaseModel):
    """A recent attempt; ``problem_details`` is None when the id is unknown."""

    attempt: AttemptRecord
    problem_details: ProblemRead | None = None


class AnalyticsReport(BaseModel):
    overall_completion: float
    overall_accuracy: float
    total_problems: int
    completed_problems: int
    subjects: list[SubjectStats] = []
    topics: list[TopicStats] = []
    difficulty: dict[Difficulty, int] = {}
    recent_activity: list[RecentActivity] = []
    insights: PerformanceInsights = PerformanceInsights()
    unresolved_problem_ids: list[str] = []


class AnalyticsResponse(SuccessResponse):
    report: AnalyticsReport

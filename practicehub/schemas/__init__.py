"""Pydantic schemas — re‑exported for convenience."""

from practicehub.schemas.common import ErrorResponse, SuccessResponse  # noqa: F401
from practicehub.schemas.user import (  # noqa: F401
    AuthResponse,
    UserCreate,
    UserLogin,
    UserRead,
)
from practicehub.schemas.problem import (  # noqa: F401
    Difficulty,
    NatAnswerRead,
    OptionRead,
    ProblemListResponse,
    ProblemRead,
    QuestionType,
)
from practicehub.schemas.attempt import (  # noqa: F401
    AttemptRead,
    AttemptRecord,
    AttemptResponse,
    AttemptSubmit,
)
from practicehub.schemas.progress import (  # noqa: F401
    AnalyticsReport,
    AnalyticsResponse,
    PerformanceInsights,
    ProgressResponse,
    ProgressSnapshot,
    RecentActivity,
    SubjectStats,
    Suggestion,
    TopicInsight,
    TopicStats,
    TopicSummary,
)

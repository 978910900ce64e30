"""API route package — imports all routers for main.py."""

from practicehub.api.health import router as health_router  # noqa: F401
from practicehub.api.users import router as users_router  # noqa: F401
from practicehub.api.problems import router as problems_router  # noqa: F401
from practicehub.api.progress import router as progress_router  # noqa: F401
from practicehub.api.progress import analytics_router  # noqa: F401

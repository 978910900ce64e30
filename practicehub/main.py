"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware

from practicehub import __version__
from practicehub.config import settings
from practicehub.api import (
    analytics_router,
    health_router,
    problems_router,
    progress_router,
    users_router,
)
from practicehub.core.errors import install_exception_handlers
from practicehub.db.session import check_connection, require_database_url

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s  %(name)-25s  %(levelname)-8s  %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    require_database_url()
    logger.info("🚀 PracticeHub backend starting on %s:%d", settings.HOST, settings.PORT)
    check_connection()
    for route in app.routes:
        methods = ",".join(sorted(getattr(route, "methods", None) or []))
        if methods and route.path.startswith("/api"):
            logger.info("   %-6s %s", methods, route.path)
    yield
    logger.info("✅ PracticeHub backend shut down")


app = FastAPI(
    title="PracticeHub API",
    description="Problem practice and progress analytics",
    version=__version__,
    lifespan=lifespan,
)

# ── Middleware ─────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

install_exception_handlers(app)

# ── Routers ───────────────────────────────────────────────────────────────────

app.include_router(health_router, tags=["Health"])
app.include_router(users_router, prefix="/api", tags=["Users"])
app.include_router(problems_router, prefix="/api/problems", tags=["Problems"])
app.include_router(progress_router, prefix="/api/progress", tags=["Progress"])
app.include_router(analytics_router, prefix="/api/analytics", tags=["Analytics"])


@app.get("/")
async def root():
    return {
        "name": "PracticeHub API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run("practicehub.main:app", host=settings.HOST, port=settings.PORT)

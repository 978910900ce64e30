"""SQLAlchemy engine & session factory."""

import logging
import sys
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from practicehub.config import settings

logger = logging.getLogger(__name__)

# Lazy initialization - only create engine when first needed
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None  # type: ignore[type-arg]


def require_database_url() -> str:
    """Return the configured DATABASE_URL or halt the process."""
    if not settings.DATABASE_URL:
        logger.critical("DATABASE_URL is missing — set it in the environment or .env file")
        sys.exit(1)
    return settings.DATABASE_URL


def _connect_args(url: str) -> dict:
    """Connection timeouts for Postgres; other dialects get none."""
    if not url.startswith("postgresql"):
        return {}
    return {
        "connect_timeout": settings.DATABASE_CONNECT_TIMEOUT,
        "options": f"-c statement_timeout={settings.DATABASE_STATEMENT_TIMEOUT_MS}",
    }


def get_engine() -> Engine:
    """Get or create SQLAlchemy engine."""
    global _engine
    if _engine is None:
        url = require_database_url()
        _engine = create_engine(
            url,
            echo=settings.DATABASE_ECHO,
            pool_pre_ping=True,
            connect_args=_connect_args(url),
        )
    return _engine


def get_session_factory():
    """Get or create session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        engine = get_engine()
        _SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    return _SessionLocal


def check_connection() -> bool:
    """Run a trivial query; log and return False instead of raising."""
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("Database connection test failed: %s", exc)
        return False
    logger.info("Successfully connected to the database")
    return True


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""


def get_db() -> Session:  # type: ignore[misc]
    """FastAPI dependency — yields a DB session and closes it after the request."""
    factory = get_session_factory()
    db = factory()
    try:
        yield db  # type: ignore[misc]
    finally:
        db.close()

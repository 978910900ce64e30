"""Backend configuration loaded from environment variables."""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings

# Always resolve .env relative to the project root, no matter where uvicorn is started from
_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    """Application settings — all values sourced from env / .env file."""

    # ── Server ──────────────────────────────────────────────────────────
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    DEBUG: bool = False
    ENV: str = "development"

    # ── CORS ────────────────────────────────────────────────────────────
    CORS_ORIGINS: List[str] = ["*"]
    ALLOWED_HOSTS: List[str] = ["*"]

    # ── Database ────────────────────────────────────────────────────────
    # Required. Empty means "not configured" and halts startup.
    DATABASE_URL: str = ""
    DATABASE_ECHO: bool = False
    DATABASE_CONNECT_TIMEOUT: int = 10  # seconds
    DATABASE_STATEMENT_TIMEOUT_MS: int = 15000

    # ── HTTP client (PracticeHubClient) ─────────────────────────────────
    API_BASE_URL: str = "http://localhost:5000"
    API_TIMEOUT_SECONDS: float = 10.0

    # ── Analytics knobs ─────────────────────────────────────────────────
    LOW_ACCURACY_THRESHOLD: float = 60.0
    HIGH_ACCURACY_THRESHOLD: float = 80.0
    LOW_COMPLETION_THRESHOLD: float = 30.0
    RECENT_ACTIVITY_LIMIT: int = 5
    SIMULATION_SEED: int | None = None

    model_config = {"env_file": str(_ENV_FILE), "case_sensitive": True, "extra": "ignore"}


settings = Settings()

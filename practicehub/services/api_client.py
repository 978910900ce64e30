"""HTTP client for the PracticeHub API.

Also serves as a ``ProblemSource`` / ``AttemptSource`` pair for
``ProgressTracker`` via ``HttpProgressSource``, so analytics can run against
a remote deployment. Requests are never retried; every call has an explicit
timeout.
"""

import logging
import uuid
from typing import Any

import httpx

from practicehub.config import settings
from practicehub.schemas.attempt import AttemptRecord, AttemptSubmit
from practicehub.schemas.problem import ProblemRead

logger = logging.getLogger(__name__)


class PracticeHubError(Exception):
    """Raised when the API is unreachable or answers with a failure envelope."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PracticeHubClient:
    """Thin wrapper around the PracticeHub HTTP API."""

    def __init__(
        self,
        base_url: str = settings.API_BASE_URL,
        *,
        timeout: float = settings.API_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base = base_url.rstrip("/")
        self._http = httpx.Client(base_url=self._base, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "PracticeHubClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ── plumbing ──────────────────────────────────────────────────────────

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            r = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise PracticeHubError(f"Request to {path} failed: {exc}") from exc

        try:
            body = r.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if r.is_error or not body.get("success", False):
            message = body.get("message") or f"HTTP {r.status_code}"
            logger.warning("%s %s → %d: %s", method, path, r.status_code, message)
            raise PracticeHubError(message, status_code=r.status_code)
        return body

    # ── health ────────────────────────────────────────────────────────────

    def healthy(self) -> bool:
        try:
            return self._http.get("/health").status_code == 200
        except httpx.HTTPError:
            return False

    # ── users ─────────────────────────────────────────────────────────────

    def register(
        self, *, name: str, profile_name: str, email: str, password: str, user_type: str
    ) -> dict[str, Any]:
        body = self._request(
            "POST",
            "/api/register",
            json={
                "name": name,
                "profile_name": profile_name,
                "email": email,
                "password": password,
                "user_type": user_type,
            },
        )
        return body["user"]

    def login(self, email: str, password: str) -> dict[str, Any]:
        body = self._request("POST", "/api/login", json={"email": email, "password": password})
        return body["user"]

    # ── problems ──────────────────────────────────────────────────────────

    def list_problems(self) -> list[ProblemRead]:
        body = self._request("GET", "/api/problems")
        return [ProblemRead.model_validate(p) for p in body["problems"]]

    def problems_by_subject(self, subject: str) -> list[ProblemRead]:
        body = self._request("GET", f"/api/problems/subject/{subject}")
        return [ProblemRead.model_validate(p) for p in body["problems"]]

    def submit_attempt(self, attempt: AttemptSubmit) -> dict[str, Any]:
        body = self._request(
            "POST", "/api/problems/attempt", json=attempt.model_dump(mode="json")
        )
        return body["attempt"]

    # ── progress ──────────────────────────────────────────────────────────

    def get_progress(self, user_id: uuid.UUID) -> dict[str, Any]:
        return self._request("GET", f"/api/progress/{user_id}")

    def attempt_records(self, user_id: uuid.UUID) -> list[AttemptRecord]:
        body = self.get_progress(user_id)
        return [
            AttemptRecord(
                problem_id=row["id"],
                subject=row.get("subject"),
                topic=row.get("topic"),
                score=1 if row["is_correct"] else 0,
                attempted_at=row["attempted_at"],
            )
            for row in body["completed_problems"]
        ]


class HttpProgressSource:
    """Problem and attempt source backed by a remote PracticeHub API."""

    def __init__(self, client: PracticeHubClient, user_id: uuid.UUID) -> None:
        self.client = client
        self.user_id = user_id

    def load_problems(self) -> list[ProblemRead]:
        return self.client.list_problems()

    def load_attempts(self) -> list[AttemptRecord]:
        return self.client.attempt_records(self.user_id)

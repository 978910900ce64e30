"""Exception handlers that render every failure as ``{success: false, message}``.

Raw exception text is logged but never sent to the client.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from practicehub.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

_LOCATIONS = {"body", "path", "query", "header", "cookie"}


def _envelope(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
        headers=headers,
    )


def validation_message(exc: RequestValidationError) -> str:
    """Collapse pydantic errors into one human-readable line."""
    errors = exc.errors()
    missing = [str(e["loc"][-1]) for e in errors if e.get("type") == "missing"]
    if missing:
        return "Missing required fields: " + ", ".join(missing)
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "value_error" and "ctx" in first:
        return str(first["ctx"].get("error", first["msg"]))
    loc = first["loc"]
    if loc and loc[0] in _LOCATIONS:
        loc = loc[1:]
    field = ".".join(str(p) for p in loc)
    return f"{field}: {first['msg']}" if field else first["msg"]


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _envelope(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = validation_message(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return _envelope(status.HTTP_400_BAD_REQUEST, message)


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

"""Shared / generic schemas."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing endpoint."""

    success: bool = False
    message: str


class SuccessResponse(BaseModel):
    """Generic success wrapper."""

    success: bool = True
    message: str | None = None

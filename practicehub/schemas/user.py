"""User & authentication schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from practicehub.core.security import is_valid_profile_name
from practicehub.schemas.common import SuccessResponse


class UserCreate(BaseModel):
    """POST /api/register"""

    name: str = Field(min_length=1)
    profile_name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)
    user_type: str = Field(min_length=1)

    @field_validator("profile_name")
    @classmethod
    def _profile_name_charset(cls, v: str) -> str:
        if not is_valid_profile_name(v):
            raise ValueError(
                "Profile name must contain only letters, numbers, and underscores"
            )
        return v


class UserLogin(BaseModel):
    """POST /api/login"""

    email: EmailStr
    password: str = Field(min_length=1)


class UserRead(BaseModel):
    """User returned from API — never exposes password."""

    id: uuid.UUID
    name: str
    profile_name: str
    email: str
    user_type: str
    created_at: datetime

    model_config = {"from_attributes": True}


class AuthResponse(SuccessResponse):
    """Register / login response: envelope + user profile."""

    user: UserRead

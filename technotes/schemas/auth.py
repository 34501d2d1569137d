"""Authentication-related schemas."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None

    @field_validator("username", "password", mode="before")
    @classmethod
    def _non_string_is_missing(cls, value: Any) -> str | None:
        # Credentials of the wrong type are reported like absent ones.
        return value if isinstance(value, str) else None


class TokenResponse(BaseModel):
    access_token: str = Field(serialization_alias="accessToken")


class MessageResponse(BaseModel):
    message: str

"""Pydantic schemas for user operations.

Presence of required fields is checked by the users service so that a
missing field yields the same 400 message whatever the field is; the
schemas only pin down types.
"""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, StrictBool

from technotes.models.user import Role


class UserCreate(BaseModel):
    username: str | None = None
    password: str | None = None
    roles: list[Role] | None = None


class UserUpdate(BaseModel):
    id: int | None = None
    username: str | None = None
    password: str | None = None
    roles: list[Role] | None = None
    active: StrictBool | None = None


class UserDelete(BaseModel):
    id: int | None = None


class UserRead(BaseModel):
    id: int
    username: str
    roles: list[str]
    active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

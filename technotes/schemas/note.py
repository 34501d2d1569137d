"""Pydantic schemas for notes."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, StrictBool


class NoteCreate(BaseModel):
    user: int | None = None
    title: str | None = None
    text: str | None = None
    completed: StrictBool | None = None


class NoteUpdate(NoteCreate):
    id: int | None = None


class NoteDelete(BaseModel):
    id: int | None = None


class NoteRead(BaseModel):
    id: int
    user: int
    username: str | None
    title: str
    text: str
    completed: bool
    created_at: datetime
    updated_at: datetime

"""Service layer for note persistence."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from technotes.core.errors import DuplicateError, NotFoundError, ValidationError
from technotes.db.session import flush_or_conflict
from technotes.models.note import Note
from technotes.models.user import User
from technotes.schemas.note import NoteCreate, NoteRead, NoteUpdate

logger = logging.getLogger(__name__)

MISSING_FIELDS = "All fields are required"
DUPLICATE_TITLE = "Duplicate note title"


async def get_note(session: AsyncSession, note_id: int) -> Note | None:
    return await session.get(Note, note_id)


async def get_note_by_title(session: AsyncSession, title: str) -> Note | None:
    result = await session.execute(select(Note).where(Note.title == title))
    return result.scalar_one_or_none()


async def list_notes(session: AsyncSession) -> list[NoteRead]:
    """Return every note with its owner's username attached, in id order."""
    result = await session.execute(select(Note).order_by(Note.id))
    notes = result.scalars().all()
    if not notes:
        raise ValidationError("No notes found")

    owner_ids = {note.user_id for note in notes}
    owners = await session.execute(select(User.id, User.username).where(User.id.in_(owner_ids)))
    usernames = dict(owners.all())

    return [
        NoteRead(
            id=note.id,
            user=note.user_id,
            username=usernames.get(note.user_id),
            title=note.title,
            text=note.text,
            completed=note.completed,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )
        for note in notes
    ]


async def create_note(session: AsyncSession, data: NoteCreate) -> Note:
    if data.user is None or not data.title or not data.text:
        raise ValidationError(MISSING_FIELDS)

    if await get_note_by_title(session, data.title):
        raise DuplicateError(DUPLICATE_TITLE)
    await _ensure_owner(session, data.user)

    note = Note(
        user_id=data.user,
        title=data.title,
        text=data.text,
        completed=bool(data.completed),
    )
    session.add(note)
    await flush_or_conflict(session, DUPLICATE_TITLE)
    logger.info("Created note %r for user %s", note.title, note.user_id)
    return note


async def update_note(session: AsyncSession, data: NoteUpdate) -> Note:
    if data.id is None or data.user is None or not data.title or not data.text or data.completed is None:
        raise ValidationError(MISSING_FIELDS)

    note = await get_note(session, data.id)
    if not note:
        raise NotFoundError("Note not found")

    # Keeping the current title must not collide with the note itself.
    duplicate = await get_note_by_title(session, data.title)
    if duplicate and duplicate.id != note.id:
        raise DuplicateError(DUPLICATE_TITLE)
    await _ensure_owner(session, data.user)

    note.user_id = data.user
    note.title = data.title
    note.text = data.text
    note.completed = data.completed

    await flush_or_conflict(session, DUPLICATE_TITLE)
    logger.info("Updated note %r (id=%s)", note.title, note.id)
    return note


async def delete_note(session: AsyncSession, note_id: int | None) -> str:
    if note_id is None:
        raise ValidationError("Note ID required")

    note = await get_note(session, note_id)
    if not note:
        raise NotFoundError("Note not found")

    reply = f"Note {note.title} with ID {note.id} deleted successfully"
    await session.delete(note)
    await session.flush()
    logger.info(reply)
    return reply


async def _ensure_owner(session: AsyncSession, user_id: int) -> None:
    if await session.get(User, user_id) is None:
        raise NotFoundError("User not found")

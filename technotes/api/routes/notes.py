"""Note endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from technotes.core.dependencies import Principal, get_current_principal, get_db
from technotes.schemas.auth import MessageResponse
from technotes.schemas.note import NoteCreate, NoteDelete, NoteRead, NoteUpdate
from technotes.services import notes as note_service

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("", response_model=list[NoteRead])
async def list_notes(
    session: AsyncSession = Depends(get_db),
    _: Principal = Depends(get_current_principal),
) -> list[NoteRead]:
    return await note_service.list_notes(session)


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    payload: NoteCreate,
    session: AsyncSession = Depends(get_db),
    _: Principal = Depends(get_current_principal),
) -> MessageResponse:
    note = await note_service.create_note(session, payload)
    await session.commit()
    return MessageResponse(message=f"New note {note.title} created")


@router.patch("", response_model=MessageResponse)
async def update_note(
    payload: NoteUpdate,
    session: AsyncSession = Depends(get_db),
    _: Principal = Depends(get_current_principal),
) -> MessageResponse:
    note = await note_service.update_note(session, payload)
    await session.commit()
    return MessageResponse(message=f"{note.title} updated")


@router.delete("", response_model=str)
async def delete_note(
    payload: NoteDelete,
    session: AsyncSession = Depends(get_db),
    _: Principal = Depends(get_current_principal),
) -> str:
    reply = await note_service.delete_note(session, payload.id)
    await session.commit()
    return reply

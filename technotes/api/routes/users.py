"""User management endpoints. Password hashes never leave the service."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from technotes.core.dependencies import Principal, get_current_principal, get_db
from technotes.schemas.auth import MessageResponse
from technotes.schemas.user import UserCreate, UserDelete, UserRead, UserUpdate
from technotes.services import users as user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserRead])
async def list_users(
    session: AsyncSession = Depends(get_db),
    _: Principal = Depends(get_current_principal),
) -> list[UserRead]:
    users = await user_service.list_users(session)
    return [UserRead.model_validate(user) for user in users]


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    session: AsyncSession = Depends(get_db),
    _: Principal = Depends(get_current_principal),
) -> MessageResponse:
    user = await user_service.create_user(session, payload)
    await session.commit()
    return MessageResponse(message=f"New user {user.username} created")


@router.patch("", response_model=MessageResponse)
async def update_user(
    payload: UserUpdate,
    session: AsyncSession = Depends(get_db),
    _: Principal = Depends(get_current_principal),
) -> MessageResponse:
    user = await user_service.update_user(session, payload)
    await session.commit()
    return MessageResponse(message=f"{user.username} updated")


@router.delete("", response_model=str)
async def delete_user(
    payload: UserDelete,
    session: AsyncSession = Depends(get_db),
    _: Principal = Depends(get_current_principal),
) -> str:
    reply = await user_service.delete_user(session, payload.id)
    await session.commit()
    return reply

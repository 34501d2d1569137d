"""User service functions for CRUD and authentication."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from technotes.core.errors import DuplicateError, NotFoundError, ReferentialIntegrityError, ValidationError
from technotes.core.security import PasswordHasher
from technotes.db.session import flush_or_conflict
from technotes.models.note import Note
from technotes.models.user import User
from technotes.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

MISSING_FIELDS = "All fields are required"


async def get_user_by_username(session: AsyncSession, username: str) -> User | None:
    result = await session.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def get_user(session: AsyncSession, user_id: int) -> User | None:
    return await session.get(User, user_id)


async def list_users(session: AsyncSession) -> list[User]:
    result = await session.execute(select(User).order_by(User.id))
    users = list(result.scalars().all())
    if not users:
        raise ValidationError("No users found")
    return users


async def authenticate_user(session: AsyncSession, username: str, password: str) -> User | None:
    """Return the user for valid credentials, ``None`` for any kind of mismatch.

    Unknown usernames, inactive accounts and wrong passwords all look the same
    to the caller.
    """
    user = await get_user_by_username(session, username)
    if not user or not user.active:
        return None
    if not PasswordHasher.verify(password, user.password_hash):
        return None
    return user


async def create_user(session: AsyncSession, user_in: UserCreate) -> User:
    if not user_in.username or not user_in.password or not user_in.roles:
        raise ValidationError(MISSING_FIELDS)

    if await get_user_by_username(session, user_in.username):
        raise DuplicateError("Duplicate username")

    user = User(
        username=user_in.username,
        password_hash=PasswordHasher.hash(user_in.password),
        roles=[role.value for role in user_in.roles],
    )
    session.add(user)
    await flush_or_conflict(session, "Duplicate username")
    logger.info("Created user %s", user.username)
    return user


async def update_user(session: AsyncSession, user_in: UserUpdate) -> User:
    if user_in.id is None or not user_in.username or not user_in.roles or user_in.active is None:
        raise ValidationError(MISSING_FIELDS)

    user = await get_user(session, user_in.id)
    if not user:
        raise NotFoundError("User not found")

    existing = await get_user_by_username(session, user_in.username)
    if existing and existing.id != user.id:
        raise DuplicateError("Duplicate username")

    user.username = user_in.username
    user.roles = [role.value for role in user_in.roles]
    user.active = user_in.active
    if user_in.password:
        user.password_hash = PasswordHasher.hash(user_in.password)

    await flush_or_conflict(session, "Duplicate username")
    logger.info("Updated user %s (id=%s)", user.username, user.id)
    return user


async def delete_user(session: AsyncSession, user_id: int | None) -> str:
    if user_id is None:
        raise ValidationError("User ID required")

    assigned = await session.execute(select(Note.id).where(Note.user_id == user_id).limit(1))
    if assigned.first() is not None:
        raise ReferentialIntegrityError("User has assigned notes")

    user = await get_user(session, user_id)
    if not user:
        raise NotFoundError("User not found")

    reply = f"Username {user.username} with ID {user.id} deleted successfully"
    await session.delete(user)
    await session.flush()
    logger.info(reply)
    return reply

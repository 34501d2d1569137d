"""Reusable dependencies for FastAPI routes."""
from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from technotes.core.errors import UnauthorizedError
from technotes.core.security import TokenService
from technotes.db.session import get_session


@dataclass(frozen=True)
class Principal:
    """Identity proven by a verified access token."""

    username: str
    roles: list[str]


async def get_db() -> AsyncIterator[AsyncSession]:
    async with get_session() as session:
        yield session


async def get_token_service() -> TokenService:
    return TokenService()


async def get_current_principal(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> Principal:
    header = request.headers.get("Authorization")
    if not header or not header.startswith("Bearer "):
        raise UnauthorizedError()

    username, roles = tokens.verify_access_token(header[len("Bearer "):].strip())
    return Principal(username=username, roles=roles)

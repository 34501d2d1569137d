"""Login and refresh flows built on the token service and the users table.

Nothing here writes session state to the database: a refresh token is valid
until it expires, and logging out only clears the client's cookie.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from technotes.core.errors import UnauthorizedError, ValidationError
from technotes.core.security import TokenService
from technotes.services.users import authenticate_user, get_user_by_username

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedTokens:
    access_token: str
    refresh_token: str


async def login(
    session: AsyncSession,
    username: str | None,
    password: str | None,
    tokens: TokenService,
) -> IssuedTokens:
    if not username or not password:
        raise ValidationError("All fields are required")

    user = await authenticate_user(session, username, password)
    if not user:
        logger.warning("Rejected login for %r", username)
        raise UnauthorizedError()

    logger.info("User %s logged in", user.username)
    return IssuedTokens(
        access_token=tokens.issue_access_token(user.username, user.roles),
        refresh_token=tokens.issue_refresh_token(user.username),
    )


async def refresh(session: AsyncSession, refresh_token: str | None, tokens: TokenService) -> str:
    """Mint a new access token carrying the user's current roles."""
    if not refresh_token:
        raise UnauthorizedError()

    username = tokens.verify_refresh_token(refresh_token)

    user = await get_user_by_username(session, username)
    if not user:
        logger.warning("Refresh token presented for missing user %r", username)
        raise UnauthorizedError()

    return tokens.issue_access_token(user.username, user.roles)

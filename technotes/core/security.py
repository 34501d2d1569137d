"""Security helpers for password hashing and JWT issuing/verification."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Iterable

import jwt
from passlib.context import CryptContext

from .config import Settings, get_settings
from .errors import ForbiddenError


@lru_cache
def _password_context(time_cost: int) -> CryptContext:
    return CryptContext(schemes=["argon2"], deprecated="auto", argon2__time_cost=time_cost)


class PasswordHasher:
    """Hash and verify user passwords using Argon2id."""

    @staticmethod
    def hash(password: str) -> str:
        return _password_context(get_settings().password_hash_time_cost).hash(password)

    @staticmethod
    def verify(password: str, hashed: str) -> bool:
        return _password_context(get_settings().password_hash_time_cost).verify(password, hashed)


class TokenService:
    """Issue and verify access and refresh tokens.

    Access tokens carry ``{"UserInfo": {"username", "roles"}}`` and are signed
    with the access secret; refresh tokens carry ``{"username"}`` and are
    signed with a separate refresh secret, so one can never stand in for the
    other.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def issue_access_token(self, username: str, roles: Iterable[str]) -> str:
        payload = {"UserInfo": {"username": username, "roles": list(roles)}}
        lifetime = timedelta(minutes=self._settings.access_token_expire_minutes)
        return self._sign(payload, self._settings.access_token_secret, lifetime)

    def issue_refresh_token(self, username: str) -> str:
        lifetime = timedelta(days=self._settings.refresh_token_expire_days)
        return self._sign({"username": username}, self._settings.refresh_token_secret, lifetime)

    def verify_access_token(self, token: str) -> tuple[str, list[str]]:
        payload = self._decode(token, self._settings.access_token_secret)
        info = payload.get("UserInfo")
        if not isinstance(info, dict) or not info.get("username"):
            raise ForbiddenError()
        return info["username"], list(info.get("roles") or [])

    def verify_refresh_token(self, token: str) -> str:
        payload = self._decode(token, self._settings.refresh_token_secret)
        username = payload.get("username")
        if not username:
            raise ForbiddenError()
        return username

    def _sign(self, payload: dict[str, Any], secret: str, lifetime: timedelta) -> str:
        now = datetime.now(timezone.utc)
        claims = {**payload, "iat": now, "exp": now + lifetime}
        return jwt.encode(claims, secret, algorithm=self._settings.jwt_algorithm)

    def _decode(self, token: str, secret: str) -> dict[str, Any]:
        try:
            return jwt.decode(token, secret, algorithms=[self._settings.jwt_algorithm])
        except jwt.InvalidTokenError as exc:
            raise ForbiddenError() from exc

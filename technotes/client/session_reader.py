"""Derive display state from an access token held by the client.

The token is parsed without checking its signature or expiry. The result is
a presentation hint only and must never decide what a user may do; the
server verifies every request on its own.

A token that cannot be parsed, or whose ``UserInfo`` claim is not shaped as
issued by the server, reads as the anonymous identity, the same as no token.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import jwt

from technotes.models.user import Role


@dataclass(frozen=True)
class SessionInfo:
    username: str = ""
    roles: list[str] = field(default_factory=list)
    is_admin: bool = False
    is_manager: bool = False
    status: str = Role.EMPLOYEE.value

    def to_dict(self) -> dict[str, Any]:
        return {
            "username": self.username,
            "roles": list(self.roles),
            "isAdmin": self.is_admin,
            "isManager": self.is_manager,
            "status": self.status,
        }


def derive_session_info(token: str | None) -> SessionInfo:
    if not token:
        return SessionInfo()

    try:
        claims = jwt.decode(token, options={"verify_signature": False, "verify_exp": False})
    except jwt.InvalidTokenError:
        return SessionInfo()

    info = claims.get("UserInfo")
    if not isinstance(info, dict):
        return SessionInfo()
    username = info.get("username")
    roles = info.get("roles")
    if not isinstance(username, str) or not isinstance(roles, list):
        return SessionInfo()

    is_manager = Role.MANAGER.value in roles
    is_admin = Role.ADMIN.value in roles
    if is_admin:
        status = Role.ADMIN.value
    elif is_manager:
        status = Role.MANAGER.value
    else:
        status = Role.EMPLOYEE.value

    return SessionInfo(
        username=username,
        roles=list(roles),
        is_admin=is_admin,
        is_manager=is_manager,
        status=status,
    )

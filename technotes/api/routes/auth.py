"""Authentication endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from technotes.core.config import get_settings
from technotes.core.dependencies import get_db, get_token_service
from technotes.core.security import TokenService
from technotes.schemas.auth import LoginRequest, MessageResponse, TokenResponse
from technotes.services import sessions as session_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _cookie_options() -> dict:
    settings = get_settings()
    return {
        "key": settings.refresh_cookie_name,
        "httponly": True,
        "secure": settings.refresh_cookie_secure,
        "samesite": "none",
    }


@router.post("", response_model=TokenResponse)
async def login(
    response: Response,
    payload: LoginRequest | None = None,
    session: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> TokenResponse:
    payload = payload or LoginRequest()
    issued = await session_service.login(session, payload.username, payload.password, tokens)
    response.set_cookie(
        value=issued.refresh_token,
        max_age=get_settings().refresh_cookie_max_age,
        **_cookie_options(),
    )
    return TokenResponse(access_token=issued.access_token)


@router.get("/refresh", response_model=TokenResponse)
async def refresh(
    request: Request,
    session: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> TokenResponse:
    refresh_token = request.cookies.get(get_settings().refresh_cookie_name)
    access_token = await session_service.refresh(session, refresh_token, tokens)
    return TokenResponse(access_token=access_token)


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request, response: Response):
    if get_settings().refresh_cookie_name not in request.cookies:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(**_cookie_options())
    return MessageResponse(message="Cookie cleared")

"""API router aggregator."""
from fastapi import APIRouter

from technotes.api.routes import auth, notes, users

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(notes.router)
api_router.include_router(users.router)

__all__ = ["api_router"]

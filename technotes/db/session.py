"""Database engine, session factory and schema bootstrap."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from technotes.core.config import get_settings
from technotes.core.errors import DuplicateError
from technotes.db.base import Base

engine = create_async_engine(get_settings().database_url, echo=False)
async_session_factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield a session; uncommitted work is rolled back if the caller raises."""

    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def create_schema(bind: AsyncEngine | None = None) -> None:
    # Importing the models registers their tables on Base.metadata.
    import technotes.models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def flush_or_conflict(session: AsyncSession, duplicate_message: str) -> None:
    """Flush pending writes, reporting a unique-index violation as a conflict."""

    # The unique index is the real guard when two writers pass the lookup at once.
    try:
        await session.flush()
    except IntegrityError as exc:
        await session.rollback()
        raise DuplicateError(duplicate_message) from exc

import asyncio
import os
import re
import tempfile
from pathlib import Path

# Settings are memoized on first use, so the environment must be in place
# before anything under technotes is imported.
os.environ.setdefault(
    "TECHNOTES_DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(tempfile.gettempdir()) / 'technotes-unused.db'}",
)
os.environ.setdefault("TECHNOTES_ACCESS_TOKEN_SECRET", "test-access-secret")
os.environ.setdefault("TECHNOTES_REFRESH_TOKEN_SECRET", "test-refresh-secret")
os.environ.setdefault("TECHNOTES_PASSWORD_HASH_TIME_COST", "1")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from technotes.core.dependencies import get_db
from technotes.core.security import PasswordHasher, TokenService
from technotes.db.session import create_schema
from technotes.main import app
from technotes.models import Note, User


class Database:
    """Synchronous facade over a per-test SQLite file."""

    def __init__(self, path: Path) -> None:
        self.engine = create_async_engine(f"sqlite+aiosqlite:///{path}", poolclass=NullPool)
        self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False, class_=AsyncSession)
        asyncio.run(create_schema(self.engine))

    def add_user(self, username, password="secret-pass", roles=("Employee",), active=True) -> User:
        user = User(
            username=username,
            password_hash=PasswordHasher.hash(password),
            roles=list(roles),
            active=active,
        )
        return asyncio.run(self._add(user))

    def add_note(self, user_id, title, text="text", completed=False) -> Note:
        return asyncio.run(self._add(Note(user_id=user_id, title=title, text=text, completed=completed)))

    def get_user(self, user_id):
        return asyncio.run(self._get(User, user_id))

    def get_note(self, note_id):
        return asyncio.run(self._get(Note, note_id))

    async def _add(self, obj):
        async with self.session_factory() as session:
            session.add(obj)
            await session.commit()
            return obj

    async def _get(self, model, key):
        async with self.session_factory() as session:
            return await session.get(model, key)


@pytest.fixture()
def db(tmp_path):
    database = Database(tmp_path / "technotes.db")

    async def _override_get_db():
        async with database.session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    yield database
    app.dependency_overrides.clear()


@pytest.fixture()
def client(db):
    return TestClient(app, base_url="https://testserver")


@pytest.fixture()
def tokens():
    return TokenService()


@pytest.fixture()
def auth_headers(tokens):
    token = tokens.issue_access_token("admin", ["Admin"])
    return {"Authorization": f"Bearer {token}"}


def refresh_cookie_from(response) -> str:
    match = re.search(r"jwt=([^;]+)", response.headers["set-cookie"])
    assert match, response.headers["set-cookie"]
    return match.group(1)


@pytest.fixture()
def refresh_cookie():
    return refresh_cookie_from

"""Shared pytest fixtures: in-memory database, ASGI client and user factory."""

from __future__ import annotations

import os

# settings are read at import time; configure before touching linkup
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOGIN_THROTTLE_ENABLED", "false")
os.environ.setdefault("EMAIL_ENABLED", "false")

import httpx  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from linkup.core.config import settings  # noqa: E402
from linkup.core.security import create_access_jwt, hash_password  # noqa: E402
from linkup.db.base import Base  # noqa: E402
from linkup.db.session import get_db  # noqa: E402
from linkup.main import app  # noqa: E402
from linkup.models.enums import Role  # noqa: E402
from linkup.models.user import User  # noqa: E402
from linkup.services.storage import LocalStorage, get_storage  # noqa: E402


@pytest.fixture()
async def engine():
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(eng.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture()
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture()
def media_storage(tmp_path) -> LocalStorage:
    return LocalStorage(str(tmp_path / "media"), "http://testserver/media")


@pytest.fixture()
async def client(session_factory, media_storage, tmp_path, monkeypatch):
    """ASGI client wired to the test database and local media storage."""

    async def _get_db():
        async with session_factory() as session:
            yield session

    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))
    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_storage] = lambda: media_storage

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(session_factory):
    """Persist a user and return it."""

    async def _make(
        email: str,
        password: str = "secret123",
        *,
        first_name: str = "Test",
        last_name: str = "User",
        role: Role = Role.user,
        is_private: bool = False,
    ) -> User:
        async with session_factory() as session:
            user = User(
                email=email,
                password_hash=hash_password(password),
                first_name=first_name,
                last_name=last_name,
                role=role,
                is_private=is_private,
                profile_picture="",
            )
            session.add(user)
            await session.commit()
            await session.refresh(user)
            return user

    return _make


def bearer(user_id: int) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_jwt(user_id)}"}

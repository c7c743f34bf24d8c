import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from linkup.core.config import settings

DATABASE_URL = settings.DATABASE_URL or (
    f"postgresql+asyncpg://{settings.PG_USER}:{settings.PG_PASSWORD}"
    f"@{settings.PG_HOST}:{settings.PG_PORT}/{settings.PG_DB}"
)


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"echo": False}
    opts = {"echo": False, "pool_pre_ping": True}
    # each Celery task runs in a fresh event loop; pooled connections can't cross loops
    if os.getenv("IN_CELERY", "0") == "1":
        opts["poolclass"] = NullPool
    return opts


engine = create_async_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

AsyncSessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


async def get_db() -> AsyncIterator[AsyncSession]:
    async with AsyncSessionLocal() as session:
        yield session


@asynccontextmanager
async def async_session() -> AsyncIterator[AsyncSession]:
    """Session for work outside a request, e.g. the token purge task."""
    async with AsyncSessionLocal() as session:
        yield session

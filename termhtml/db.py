from __future__ import annotations

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from termhtml.config import settings

Base = declarative_base()


engine = create_async_engine(settings.database_url, echo=False, future=True)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield one session per request to the ``/logs`` endpoints."""
    async with AsyncSessionLocal() as session:
        yield session


async def init_models() -> None:
    """Create the ``logs`` table without running migrations.

    Used by ``serve --init-db``; deployments apply the alembic revisions instead.
    """
    from termhtml import models  # noqa: F401  # registers Log on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

# Base for models
Base = declarative_base()


def build_engine(database_url: str, *, echo: bool = False, **engine_kwargs: Any) -> AsyncEngine:
    return create_async_engine(database_url, echo=echo, **engine_kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, autoflush=False, expire_on_commit=False)


# Ensure all model modules register with Base metadata
from infrastructure.database import models as _models  # noqa: E402,F401


async def check_connection(engine: AsyncEngine) -> None:
    """Round-trip a trivial statement; raises when the store is unreachable."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

"""
Database engine and session management.

The service keeps one key-value table (see models.db.UserStateDB). Local runs
use an SQLite file; deployments point database_url at Postgres.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from shortfall.config import settings
from shortfall.models.db import Base

logger = logging.getLogger(__name__)


def engine_options(database_url: str) -> dict[str, Any]:
    """
    Keyword arguments for create_async_engine().

    Pre-ping is only useful for server databases whose pooled connections
    can be dropped; an SQLite file has nothing to ping.
    """
    options: dict[str, Any] = {"echo": settings.debug}
    if make_url(database_url).get_backend_name() != "sqlite":
        options["pool_pre_ping"] = True
    return options


engine = create_async_engine(settings.database_url, **engine_options(settings.database_url))

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    Everything a request saves is committed together when the handler
    returns; a database error rolls the whole request back.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create the user_state table if it does not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("database_initialized", extra={"backend": engine.url.get_backend_name()})

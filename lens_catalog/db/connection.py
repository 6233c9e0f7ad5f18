from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from lens_catalog.db.models import Base
from lens_catalog.settings import AppSettings, get_settings

logger = logging.getLogger(__name__)


def create_engine(settings: AppSettings | None = None) -> AsyncEngine:
    """Create the async SQLAlchemy engine for the preference store.

    SQLite engines skip the pool sizing arguments, which only apply to
    server databases.
    """

    active_settings = settings or get_settings()
    url = active_settings.resolved_preferences_database_url

    if active_settings.database_type == "sqlite":
        return create_async_engine(url, future=True, echo=False)

    return create_async_engine(
        url,
        future=True,
        echo=False,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,  # Validate connections before use
        pool_recycle=1800,  # Recycle connections every 30 min
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def init_models(engine: AsyncEngine) -> None:
    """Create the preference tables when they do not exist yet."""

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(
        "Preference tables ready on %s",
        engine.url.render_as_string(hide_password=True),
    )


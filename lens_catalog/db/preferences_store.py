"""Database-backed storage for favorites and comparison sets."""

from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lens_catalog.db.models import PreferenceEntry, PreferenceSetName
from lens_catalog.services.preferences import PreferenceStoreProtocol

logger = logging.getLogger(__name__)


class SqlPreferenceStore(PreferenceStoreProtocol):
    """Encapsulates the SQLAlchemy operations behind the preference sets.

    Each ``save_*`` call replaces the rows of one set inside a single
    transaction, so readers never observe a half-written set.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def _load(self, set_name: PreferenceSetName) -> set[str]:
        query = select(PreferenceEntry.lens_id).where(
            PreferenceEntry.set_name == set_name.value
        )
        async with self._session_factory() as session:
            result = await session.execute(query)
            return set(result.scalars().all())

    async def _replace(self, set_name: PreferenceSetName, lens_ids: set[str]) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                await session.execute(
                    delete(PreferenceEntry).where(
                        PreferenceEntry.set_name == set_name.value
                    )
                )
                session.add_all(
                    PreferenceEntry(set_name=set_name.value, lens_id=lens_id)
                    for lens_id in sorted(lens_ids)
                )
        logger.debug("Stored %d lenses in %s", len(lens_ids), set_name.value)

    async def load_favorites(self) -> set[str]:
        return await self._load(PreferenceSetName.FAVORITES)

    async def save_favorites(self, lens_ids: set[str]) -> None:
        await self._replace(PreferenceSetName.FAVORITES, lens_ids)

    async def load_comparison_set(self) -> set[str]:
        return await self._load(PreferenceSetName.COMPARISON)

    async def save_comparison_set(self, lens_ids: set[str]) -> None:
        await self._replace(PreferenceSetName.COMPARISON, lens_ids)


__all__ = ["SqlPreferenceStore"]

"""User-owned lens sets: favorites and the comparison tray.

Persistence is delegated to a :class:`PreferenceStoreProtocol` implementation:

* ``load_favorites``/``save_favorites`` – the unbounded favorites set.
* ``load_comparison_set``/``save_comparison_set`` – the comparison set, capped
  at :data:`~lens_catalog.errors.MAX_COMPARISON_ITEMS` members.

:class:`PreferenceSetManager` owns the in-process copy of both sets. Each set
has its own :class:`asyncio.Lock`, held for the whole
read-modify-persist-publish sequence, so concurrent callers mutating the same
set are serialised while favorites and comparison updates never block each
other. The in-process state is only replaced once the store accepted the new
set; a failing save propagates unchanged and leaves the previous state intact.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from lens_catalog.errors import (
    MAX_COMPARISON_ITEMS,
    DataCorrupted,
    MaxComparisonItemsReached,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class PreferenceStoreProtocol(Protocol):
    """Durable storage for the favorites and comparison sets."""

    async def load_favorites(self) -> set[str]:
        """Return the stored favorite lens identifiers."""

    async def save_favorites(self, lens_ids: set[str]) -> None:
        """Replace the stored favorites with ``lens_ids``."""

    async def load_comparison_set(self) -> set[str]:
        """Return the stored comparison lens identifiers."""

    async def save_comparison_set(self, lens_ids: set[str]) -> None:
        """Replace the stored comparison set with ``lens_ids``."""


class PreferenceSetManager:
    """Coordinates favorites/comparison mutations with write-through storage."""

    def __init__(self, store: PreferenceStoreProtocol) -> None:
        self._store = store
        self._favorites: frozenset[str] = frozenset()
        self._comparison: frozenset[str] = frozenset()
        self._favorites_lock = asyncio.Lock()
        self._comparison_lock = asyncio.Lock()

    async def load(self) -> None:
        """Initialise both sets from the store."""

        async with self._favorites_lock:
            self._favorites = frozenset(await self._store.load_favorites())
        async with self._comparison_lock:
            comparison = frozenset(await self._store.load_comparison_set())
            if len(comparison) > MAX_COMPARISON_ITEMS:
                raise DataCorrupted(
                    f"stored comparison set holds {len(comparison)} lenses; "
                    f"at most {MAX_COMPARISON_ITEMS} are allowed"
                )
            self._comparison = comparison
        logger.debug(
            "Loaded %d favorites and %d comparison lenses",
            len(self._favorites),
            len(self._comparison),
        )

    # -- Favorites -----------------------------------------------------------------

    async def is_favorite(self, lens_id: str) -> bool:
        return lens_id in self._favorites

    async def get_favorites(self) -> frozenset[str]:
        """Return a snapshot of the favorites set."""

        return self._favorites

    async def toggle_favorite(self, lens_id: str) -> bool:
        """Flip favorite membership for ``lens_id`` and return the new state."""

        async with self._favorites_lock:
            if lens_id in self._favorites:
                updated = self._favorites - {lens_id}
            else:
                updated = self._favorites | {lens_id}
            await self._store.save_favorites(set(updated))
            self._favorites = updated
        logger.debug("Toggled favorite %s (now favorite=%s)", lens_id, lens_id in updated)
        return lens_id in updated

    async def save_favorites(self, lens_ids: Iterable[str]) -> None:
        """Replace the whole favorites set."""

        updated = frozenset(lens_ids)
        async with self._favorites_lock:
            await self._store.save_favorites(set(updated))
            self._favorites = updated
        logger.debug("Replaced favorites with %d lenses", len(updated))

    # -- Comparison ----------------------------------------------------------------

    async def get_comparison_set(self) -> frozenset[str]:
        """Return a snapshot of the comparison set."""

        return self._comparison

    async def is_in_comparison(self, lens_id: str) -> bool:
        return lens_id in self._comparison

    async def can_add_to_comparison(self, lens_id: str | None = None) -> bool:
        """Return ``True`` if ``add_to_comparison(lens_id)`` would succeed."""

        if lens_id is not None and lens_id in self._comparison:
            return True
        return len(self._comparison) < MAX_COMPARISON_ITEMS

    async def add_to_comparison(self, lens_id: str) -> None:
        """Add ``lens_id`` to the comparison set.

        Re-adding a member is a no-op. Adding a new lens to a full set raises
        :class:`MaxComparisonItemsReached` and leaves the set untouched.
        """

        async with self._comparison_lock:
            if lens_id in self._comparison:
                return
            if len(self._comparison) >= MAX_COMPARISON_ITEMS:
                raise MaxComparisonItemsReached()
            await self._commit_comparison(self._comparison | {lens_id})
        logger.debug("Added %s to comparison", lens_id)

    async def remove_from_comparison(self, lens_id: str) -> None:
        """Remove ``lens_id`` from the comparison set; absent ids are ignored."""

        async with self._comparison_lock:
            if lens_id not in self._comparison:
                return
            await self._commit_comparison(self._comparison - {lens_id})
        logger.debug("Removed %s from comparison", lens_id)

    async def toggle_comparison(self, lens_id: str) -> bool:
        """Remove ``lens_id`` if present, otherwise add it; return new membership."""

        async with self._comparison_lock:
            if lens_id in self._comparison:
                await self._commit_comparison(self._comparison - {lens_id})
                included = False
            else:
                if len(self._comparison) >= MAX_COMPARISON_ITEMS:
                    raise MaxComparisonItemsReached()
                await self._commit_comparison(self._comparison | {lens_id})
                included = True
        logger.debug("Toggled comparison %s (now included=%s)", lens_id, included)
        return included

    async def clear_comparison(self) -> None:
        async with self._comparison_lock:
            await self._commit_comparison(frozenset())
        logger.debug("Cleared comparison set")

    async def _commit_comparison(self, updated: frozenset[str]) -> None:
        # Caller holds ``_comparison_lock``.
        await self._store.save_comparison_set(set(updated))
        self._comparison = updated


__all__ = ["PreferenceSetManager", "PreferenceStoreProtocol"]

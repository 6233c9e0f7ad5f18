"""Read-model oriented catalog service.

The service fetches records through a :class:`CatalogProviderProtocol` and
hands them to the pure helpers in :mod:`lens_catalog.services.filtering` and
:mod:`lens_catalog.services.relations`. Provider errors propagate unchanged and
no results are cached between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from lens_catalog.errors import CameraNotFound, LensNotFound, RentalNotFound
from lens_catalog.schemas.catalog import (
    Camera,
    CompatibilityLevel,
    CompatibilityResult,
    Lens,
    LensGroup,
    RecordingFormat,
    Rental,
)
from lens_catalog.schemas.filters import LensFilterCriteria
from lens_catalog.services import filtering, relations
from lens_catalog.services.preferences import PreferenceSetManager

logger = logging.getLogger(__name__)


@runtime_checkable
class CatalogProviderProtocol(Protocol):
    """Asynchronous source of lens, camera and rental records.

    Point lookups return ``None`` for unknown identifiers. Implementations
    raise :class:`~lens_catalog.errors.NetworkError` or
    :class:`~lens_catalog.errors.DataCorrupted` when the source fails.
    """

    async def fetch_all_lenses(self) -> Sequence[Lens]:
        """Return every lens in catalog order."""

    async def fetch_lens(self, lens_id: str) -> Lens | None:
        """Return a single lens by identifier."""

    async def fetch_all_cameras(self) -> Sequence[Camera]:
        """Return every camera body."""

    async def fetch_camera(self, camera_id: str) -> Camera | None:
        """Return a single camera by identifier."""

    async def fetch_recording_formats(self) -> Sequence[RecordingFormat]:
        """Return every recording format across cameras."""

    async def fetch_all_rentals(self) -> Sequence[Rental]:
        """Return every rental house with its lens inventory."""

    async def fetch_rental(self, rental_id: str) -> Rental | None:
        """Return a single rental house by identifier."""

    async def fetch_lenses_and_rentals(
        self,
    ) -> tuple[Sequence[Lens], Sequence[Rental]]:
        """Return every lens and every rental from one read of the source."""


class CatalogQueryService:
    """Service focused on read-only catalog queries."""

    def __init__(self, provider: CatalogProviderProtocol) -> None:
        self._provider = provider

    # -- Listings ------------------------------------------------------------------

    async def list_lenses(self) -> list[Lens]:
        return list(await self._provider.fetch_all_lenses())

    async def list_cameras(self) -> list[Camera]:
        return list(await self._provider.fetch_all_cameras())

    async def list_recording_formats(self) -> list[RecordingFormat]:
        return list(await self._provider.fetch_recording_formats())

    async def list_rentals(self) -> list[Rental]:
        return list(await self._provider.fetch_all_rentals())

    # -- Point lookups -------------------------------------------------------------

    async def get_lens(self, lens_id: str) -> Lens:
        """Return the lens with ``lens_id`` or raise :class:`LensNotFound`."""

        lens = await self._provider.fetch_lens(lens_id)
        if lens is None:
            raise LensNotFound(lens_id)
        return lens

    async def get_camera(self, camera_id: str) -> Camera:
        camera = await self._provider.fetch_camera(camera_id)
        if camera is None:
            raise CameraNotFound(camera_id)
        return camera

    async def get_rental(self, rental_id: str) -> Rental:
        rental = await self._provider.fetch_rental(rental_id)
        if rental is None:
            raise RentalNotFound(rental_id)
        return rental

    # -- Filtering and search ------------------------------------------------------

    async def filter_lenses(self, criteria: LensFilterCriteria) -> list[Lens]:
        """Fetch the catalog and apply ``criteria``."""

        lenses = await self._provider.fetch_all_lenses()
        filtered = filtering.filter_lenses(lenses, criteria)
        logger.debug("Filtered %d lenses down to %d", len(lenses), len(filtered))
        return filtered

    async def search_lenses(self, query: str) -> list[Lens]:
        lenses = await self._provider.fetch_all_lenses()
        return filtering.search_lenses(lenses, query)

    async def group_lenses(
        self, criteria: LensFilterCriteria | None = None
    ) -> list[LensGroup]:
        """Return lenses grouped by manufacturer and series, optionally filtered."""

        if criteria is None:
            lenses = await self.list_lenses()
        else:
            lenses = await self.filter_lenses(criteria)
        return filtering.group_lenses(lenses)

    # -- Relations -----------------------------------------------------------------

    async def lenses_for_rental(self, rental_id: str) -> list[Lens]:
        lenses, rentals = await self._provider.fetch_lenses_and_rentals()
        return relations.lenses_for_rental(rental_id, lenses, rentals)

    async def rentals_for_lens(self, lens_id: str) -> list[Rental]:
        lenses, rentals = await self._provider.fetch_lenses_and_rentals()
        return relations.rentals_for_lens(lens_id, lenses, rentals)

    # -- Preference views ----------------------------------------------------------

    async def favorite_lenses(self, preferences: PreferenceSetManager) -> list[Lens]:
        """Return favorite lenses sorted by name."""

        favorite_ids = await preferences.get_favorites()
        lenses = await self._provider.fetch_all_lenses()
        return sorted(
            (lens for lens in lenses if lens.lens_id in favorite_ids),
            key=lambda lens: lens.name,
        )

    async def comparison_lenses(
        self, preferences: PreferenceSetManager
    ) -> list[Lens]:
        """Return the lenses in the comparison set in catalog order."""

        comparison_ids = await preferences.get_comparison_set()
        lenses = await self._provider.fetch_all_lenses()
        return [lens for lens in lenses if lens.lens_id in comparison_ids]

    # -- Compatibility -------------------------------------------------------------

    def check_compatibility(self, lens: Lens, camera: Camera) -> CompatibilityResult:
        """Compare the lens formats against the camera's recording formats."""

        if camera.is_compatible_with(lens):
            return CompatibilityResult(
                is_compatible=True, level=CompatibilityLevel.FULL
            )
        formats = ", ".join(lens.formats) or "unknown"
        return CompatibilityResult(
            is_compatible=False,
            level=CompatibilityLevel.PARTIAL,
            notes=(
                f"Format mismatch: Lens format '{formats}' may not be fully "
                "compatible with camera sensor",
            ),
        )

    async def recommended_cameras(self, lens_id: str) -> list[Camera]:
        """Return cameras compatible with ``lens_id`` sorted by display name."""

        lens = await self.get_lens(lens_id)
        cameras = await self._provider.fetch_all_cameras()
        return sorted(
            (camera for camera in cameras if camera.is_compatible_with(lens)),
            key=lambda camera: camera.display_name,
        )

    async def compatible_lenses(self, camera_id: str) -> list[Lens]:
        """Return lenses compatible with ``camera_id`` sorted by name."""

        camera = await self.get_camera(camera_id)
        lenses = await self._provider.fetch_all_lenses()
        return sorted(
            (lens for lens in lenses if camera.is_compatible_with(lens)),
            key=lambda lens: lens.name,
        )


__all__ = ["CatalogProviderProtocol", "CatalogQueryService"]

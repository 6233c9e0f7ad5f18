"""In-memory catalog provider and preference store.

Both classes are deterministic doubles for tests and local development; the
provider can also be hydrated from a catalog JSON fixture.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from lens_catalog.errors import DataCorrupted
from lens_catalog.providers.mapping import (
    map_camera_data,
    map_lens_database,
    read_json_object,
)
from lens_catalog.schemas.catalog import Camera, Lens, RecordingFormat, Rental
from lens_catalog.services.catalog_service import CatalogProviderProtocol
from lens_catalog.services.preferences import PreferenceStoreProtocol


class InMemoryCatalogProvider(CatalogProviderProtocol):
    """Catalog provider holding records in insertion-ordered dictionaries."""

    def __init__(
        self,
        *,
        lenses: Iterable[Lens] = (),
        cameras: Iterable[Camera] = (),
        rentals: Iterable[Rental] = (),
        recording_formats: Iterable[RecordingFormat] | None = None,
    ) -> None:
        self._lenses: dict[str, Lens] = {lens.lens_id: lens for lens in lenses}
        self._cameras: dict[str, Camera] = {
            camera.camera_id: camera for camera in cameras
        }
        self._rentals: dict[str, Rental] = {
            rental.rental_id: rental for rental in rentals
        }
        if recording_formats is None:
            # Derive the format list from the cameras when none is supplied.
            recording_formats = [
                recording_format
                for camera in self._cameras.values()
                for recording_format in camera.supported_formats
            ]
        self._recording_formats: list[RecordingFormat] = list(recording_formats)

    @classmethod
    def from_payload(
        cls,
        database: Mapping[str, Any],
        camera_data: Mapping[str, Any] | None = None,
    ) -> "InMemoryCatalogProvider":
        """Build a provider from the lens database and camera JSON shapes."""

        lenses, rentals = map_lens_database(database)
        cameras: list[Camera] = []
        formats: list[RecordingFormat] = []
        if camera_data is not None:
            cameras, formats = map_camera_data(camera_data)
        return cls(
            lenses=lenses,
            cameras=cameras,
            rentals=rentals,
            recording_formats=formats,
        )

    @classmethod
    def from_json_file(
        cls, path: str | Path, camera_path: str | Path | None = None
    ) -> "InMemoryCatalogProvider":
        """Load a fixture written in the API's ``{"database": {...}}`` shape."""

        payload = read_json_object(Path(path))
        database = payload.get("database", payload)
        if not isinstance(database, Mapping):
            raise DataCorrupted(f"{path}: 'database' must be a JSON object")
        camera_data = read_json_object(Path(camera_path)) if camera_path else None
        return cls.from_payload(database, camera_data)

    async def fetch_all_lenses(self) -> Sequence[Lens]:
        return list(self._lenses.values())

    async def fetch_lens(self, lens_id: str) -> Lens | None:
        return self._lenses.get(lens_id)

    async def fetch_all_cameras(self) -> Sequence[Camera]:
        return list(self._cameras.values())

    async def fetch_camera(self, camera_id: str) -> Camera | None:
        return self._cameras.get(camera_id)

    async def fetch_recording_formats(self) -> Sequence[RecordingFormat]:
        return list(self._recording_formats)

    async def fetch_all_rentals(self) -> Sequence[Rental]:
        return list(self._rentals.values())

    async def fetch_rental(self, rental_id: str) -> Rental | None:
        return self._rentals.get(rental_id)

    async def fetch_lenses_and_rentals(
        self,
    ) -> tuple[Sequence[Lens], Sequence[Rental]]:
        lenses, rentals = await asyncio.gather(
            self.fetch_all_lenses(), self.fetch_all_rentals()
        )
        return lenses, rentals


class InMemoryPreferenceStore(PreferenceStoreProtocol):
    """Preference store keeping both sets in process memory."""

    def __init__(
        self,
        *,
        favorites: Iterable[str] = (),
        comparison: Iterable[str] = (),
    ) -> None:
        self.favorites: set[str] = set(favorites)
        self.comparison: set[str] = set(comparison)
        self.favorites_saves = 0
        self.comparison_saves = 0

    async def load_favorites(self) -> set[str]:
        return set(self.favorites)

    async def save_favorites(self, lens_ids: set[str]) -> None:
        self.favorites = set(lens_ids)
        self.favorites_saves += 1

    async def load_comparison_set(self) -> set[str]:
        return set(self.comparison)

    async def save_comparison_set(self, lens_ids: set[str]) -> None:
        self.comparison = set(lens_ids)
        self.comparison_saves += 1


__all__ = ["InMemoryCatalogProvider", "InMemoryPreferenceStore"]

"""Catalog provider backed by the remote lens database API.

The API answers with an envelope of the form::

    {"success": true, "database": {"lenses": [...], "rentals": [...], "inventory": [...]}}

Camera bodies and recording formats are not served by the API; they are read
from the local JSON file configured through ``CAMERA_DATA_PATH``.

Every call performs a fresh request; the provider keeps no cache.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import httpx

from lens_catalog.errors import DataCorrupted, NetworkError
from lens_catalog.providers.mapping import (
    map_camera_data,
    map_lens_database,
    read_json_object,
)
from lens_catalog.schemas.catalog import Camera, Lens, RecordingFormat, Rental
from lens_catalog.services.catalog_service import CatalogProviderProtocol
from lens_catalog.settings import AppSettings

logger = logging.getLogger(__name__)


class HttpCatalogProvider(CatalogProviderProtocol):
    """Fetch lenses and rentals over HTTP and cameras from a local file."""

    def __init__(
        self,
        *,
        api_url: str,
        camera_data_path: str | Path,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_url = api_url
        self._camera_data_path = Path(camera_data_path)
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    @classmethod
    def from_settings(
        cls, settings: AppSettings, *, client: httpx.AsyncClient | None = None
    ) -> "HttpCatalogProvider":
        return cls(
            api_url=settings.catalog_api_url,
            camera_data_path=settings.camera_data_path,
            timeout=settings.catalog_timeout_seconds,
            client=client,
        )

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""

        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpCatalogProvider":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def _fetch_database(self) -> Mapping[str, Any]:
        try:
            response = await self._http().get(self._api_url, timeout=self._timeout)
        except httpx.HTTPError as exc:
            logger.warning("Lens database request to %s failed: %s", self._api_url, exc)
            raise NetworkError(str(exc) or exc.__class__.__name__) from exc

        if response.status_code != 200:
            logger.warning(
                "Lens database request to %s returned HTTP %s",
                self._api_url,
                response.status_code,
            )
            raise NetworkError(f"HTTP error with status code: {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("Lens database response is not valid JSON: %s", exc)
            raise DataCorrupted(f"invalid JSON from lens database: {exc}") from exc

        if not isinstance(payload, Mapping):
            raise DataCorrupted("lens database response must be a JSON object")
        if payload.get("success") is not True:
            logger.warning("Lens database at %s reported success: false", self._api_url)
            raise NetworkError("API returned success: false")

        database = payload.get("database")
        if not isinstance(database, Mapping):
            raise DataCorrupted("lens database response is missing 'database'")
        return database

    async def _load_lenses_and_rentals(self) -> tuple[list[Lens], list[Rental]]:
        database = await self._fetch_database()
        lenses, rentals = map_lens_database(database)
        logger.debug("Fetched %d lenses and %d rentals", len(lenses), len(rentals))
        return lenses, rentals

    async def _load_camera_data(self) -> tuple[list[Camera], list[RecordingFormat]]:
        payload = await asyncio.to_thread(read_json_object, self._camera_data_path)
        return map_camera_data(payload)

    async def fetch_all_lenses(self) -> Sequence[Lens]:
        lenses, _ = await self._load_lenses_and_rentals()
        return lenses

    async def fetch_lens(self, lens_id: str) -> Lens | None:
        lenses = await self.fetch_all_lenses()
        return next((lens for lens in lenses if lens.lens_id == lens_id), None)

    async def fetch_all_cameras(self) -> Sequence[Camera]:
        cameras, _ = await self._load_camera_data()
        return cameras

    async def fetch_camera(self, camera_id: str) -> Camera | None:
        cameras = await self.fetch_all_cameras()
        return next((camera for camera in cameras if camera.camera_id == camera_id), None)

    async def fetch_recording_formats(self) -> Sequence[RecordingFormat]:
        _, formats = await self._load_camera_data()
        return formats

    async def fetch_all_rentals(self) -> Sequence[Rental]:
        _, rentals = await self._load_lenses_and_rentals()
        return rentals

    async def fetch_rental(self, rental_id: str) -> Rental | None:
        rentals = await self.fetch_all_rentals()
        return next((rental for rental in rentals if rental.rental_id == rental_id), None)

    async def fetch_lenses_and_rentals(
        self,
    ) -> tuple[Sequence[Lens], Sequence[Rental]]:
        """Read lenses and rentals from a single API response."""

        return await self._load_lenses_and_rentals()


__all__ = ["HttpCatalogProvider"]

"""Shared fixtures describing a small, deterministic lens catalog."""

from __future__ import annotations

from typing import Any

import pytest
import pytest_asyncio

from lens_catalog.providers.in_memory import (
    InMemoryCatalogProvider,
    InMemoryPreferenceStore,
)
from lens_catalog.schemas.catalog import (
    Camera,
    Lens,
    RecordingFormat,
    Rental,
    SensorSpecifications,
)
from lens_catalog.services.catalog_service import CatalogQueryService
from lens_catalog.services.preferences import PreferenceSetManager


@pytest.fixture
def scenario_lenses() -> list[Lens]:
    """Two-lens catalog: a rentable zoom from ``X`` and a prime from ``Y``."""

    return [
        Lens(
            lens_id="a",
            name="Alpha Zoom",
            manufacturer="X",
            focal_length_min=24,
            focal_length_max=70,
            max_aperture=2.8,
            is_rentable=True,
        ),
        Lens(
            lens_id="b",
            name="Beta Prime",
            manufacturer="Y",
            focal_length_min=50,
            focal_length_max=50,
            max_aperture=1.4,
            is_rentable=False,
        ),
    ]


@pytest.fixture
def catalog_lenses() -> list[Lens]:
    return [
        Lens(
            lens_id="L1",
            name="Master Prime 18mm",
            manufacturer="ARRI",
            model="Master Prime",
            description="Fast spherical prime",
            focal_length_min=18,
            focal_length_max=18,
            max_aperture=1.3,
            formats=("S35",),
            is_rentable=True,
        ),
        Lens(
            lens_id="L2",
            name="Supreme Prime 85mm",
            manufacturer="Zeiss",
            model="Supreme Prime",
            description="Large format prime",
            focal_length_min=85,
            focal_length_max=85,
            max_aperture=1.5,
            formats=("FF", "VV"),
            is_rentable=False,
        ),
        Lens(
            lens_id="L3",
            name="Master Prime 50mm",
            manufacturer="ARRI",
            model="master-prime series",
            description="Standard spherical prime",
            focal_length_min=50,
            focal_length_max=50,
            max_aperture=1.3,
            formats=("S35",),
            is_rentable=True,
        ),
        Lens(
            lens_id="L4",
            name="Optimo 24-290",
            manufacturer="Angenieux",
            model="Optimo",
            description="Long cinema zoom",
            focal_length_min=24,
            focal_length_max=290,
            max_aperture=2.8,
            formats=("S35",),
            is_rentable=False,
        ),
    ]


@pytest.fixture
def catalog_rentals() -> list[Rental]:
    return [
        Rental(rental_id="R1", name="Camera House", lens_ids=frozenset({"L1", "L3"})),
        Rental(rental_id="R2", name="Lens Depot", lens_ids=frozenset({"L3", "L99"})),
        Rental(rental_id="R3", name="Empty Shelf"),
    ]


@pytest.fixture
def catalog_cameras() -> list[Camera]:
    return [
        Camera(
            camera_id="C1",
            manufacturer="ARRI",
            model="Alexa 35",
            sensor=SensorSpecifications(type="S35", width="27.99", height="19.22"),
            supported_formats=(
                RecordingFormat(format_id="F1", camera_id="C1", name="S35"),
            ),
        ),
        Camera(
            camera_id="C2",
            manufacturer="Sony",
            model="Venice 2",
            sensor=SensorSpecifications(type="FF"),
            supported_formats=(
                RecordingFormat(format_id="F2", camera_id="C2", name="FF"),
            ),
        ),
    ]


@pytest.fixture
def provider(
    catalog_lenses: list[Lens],
    catalog_cameras: list[Camera],
    catalog_rentals: list[Rental],
) -> InMemoryCatalogProvider:
    return InMemoryCatalogProvider(
        lenses=catalog_lenses,
        cameras=catalog_cameras,
        rentals=catalog_rentals,
    )


@pytest.fixture
def service(provider: InMemoryCatalogProvider) -> CatalogQueryService:
    return CatalogQueryService(provider)


@pytest.fixture
def preference_store() -> InMemoryPreferenceStore:
    return InMemoryPreferenceStore()


@pytest_asyncio.fixture
async def preferences(preference_store: InMemoryPreferenceStore) -> PreferenceSetManager:
    manager = PreferenceSetManager(preference_store)
    await manager.load()
    return manager


@pytest.fixture
def lens_database_payload() -> dict[str, Any]:
    """Raw ``database`` section as served by the lens database API."""

    return {
        "lenses": [
            {
                "id": "101",
                "display_name": "Cooke S4/i 32mm",
                "manufacturer": "Cooke",
                "lens_name": "S4/i",
                "focal_length": "32mm",
                "aperture": "T2.0",
                "format": "S35",
                "image_circle": "33.0",
            },
            {
                "id": "102",
                "display_name": "Fujinon Premista 28-100",
                "manufacturer": "Fujifilm",
                "lens_name": "Premista",
                "focal_length": "28-100mm",
                "aperture": "T2.9",
                "format": "FF",
                "lens_format": "LF / VV",
            },
        ],
        "rentals": [
            {
                "id": "7",
                "name": "North Rentals",
                "phone": "+358 40 123",
                "website": "https://north.example.com",
                "city": "Helsinki",
                "country": "Finland",
            },
        ],
        "inventory": [
            {"rental_id": "7", "lens_id": "101"},
        ],
    }


@pytest.fixture
def camera_payload() -> dict[str, Any]:
    """Raw camera file contents with two cameras and their recording formats."""

    return {
        "camera": [
            {
                "id": "1",
                "manufacturer": "ARRI",
                "model": "Alexa Mini LF",
                "sensor": "LF",
                "sensorwidth": "36.70",
                "sensorheight": "25.54",
                "imagecircle": "44.71",
            },
            {
                "id": "2",
                "manufacturer": "RED",
                "model": "Komodo",
                "sensor": "S35",
            },
        ],
        "formats": [
            {
                "id": "11",
                "cameraid": "1",
                "recordingformat": "LF Open Gate",
                "recordingwidth": "36.70",
                "recordingheight": "25.54",
            },
            {"id": "12", "cameraid": "2", "recordingformat": "S35"},
        ],
    }

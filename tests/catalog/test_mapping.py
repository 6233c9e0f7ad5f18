"""Tests for raw payload mapping and the JSON-backed in-memory provider."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from lens_catalog.errors import DataCorrupted
from lens_catalog.providers.in_memory import InMemoryCatalogProvider
from lens_catalog.providers.mapping import (
    map_camera_data,
    map_lens,
    map_lens_database,
    parse_aperture,
    parse_focal_range,
    parse_formats,
    read_json_object,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("24-70mm", (24.0, 70.0)),
        ("50mm", (50.0, 50.0)),
        ("18 - 35", (18.0, 35.0)),
        (85, (85.0, 85.0)),
        ("12.5-25mm", (12.5, 25.0)),
    ],
)
def test_parse_focal_range(raw: Any, expected: tuple[float, float]) -> None:
    assert parse_focal_range(raw) == expected


def test_parse_focal_range_rejects_text() -> None:
    with pytest.raises(DataCorrupted):
        parse_focal_range("unknown")


def test_parse_aperture_and_formats() -> None:
    assert parse_aperture("T2.8") == 2.8
    assert parse_aperture("f/1.4") == 1.4
    assert parse_formats("S35 / FF", "FF;LF", None) == ("S35", "FF", "LF")


def test_map_lens_database(lens_database_payload: dict[str, Any]) -> None:
    lenses, rentals = map_lens_database(lens_database_payload)

    cooke, fujinon = lenses
    assert cooke.lens_id == "101"
    assert cooke.name == "Cooke S4/i 32mm"
    assert cooke.model == "S4/i"
    assert (cooke.focal_length_min, cooke.focal_length_max) == (32.0, 32.0)
    assert cooke.max_aperture == 2.0
    assert cooke.formats == ("S35",)
    assert cooke.is_rentable is True
    assert cooke.image_circle == "33.0"

    assert fujinon.is_zoom
    assert fujinon.formats == ("FF", "LF", "VV")
    assert fujinon.is_rentable is False

    (rental,) = rentals
    assert rental.rental_id == "7"
    assert rental.lens_ids == frozenset({"101"})
    assert rental.contact.website == "https://north.example.com"
    assert rental.location is not None and rental.location.city == "Helsinki"


def test_map_lens_requires_identifier() -> None:
    with pytest.raises(DataCorrupted) as excinfo:
        map_lens({"focal_length": "50mm", "aperture": "T2"})

    assert "missing 'id'" in excinfo.value.message


def test_map_lens_rejects_zero_aperture() -> None:
    with pytest.raises(DataCorrupted):
        map_lens({"id": "9", "focal_length": "50mm", "aperture": "0"})


def test_map_lens_database_rejects_non_list_sections() -> None:
    with pytest.raises(DataCorrupted):
        map_lens_database({"lenses": {"id": "1"}})


def test_map_lens_database_skips_unmappable_lens_rows(
    caplog: pytest.LogCaptureFixture,
) -> None:
    database = {
        "lenses": [
            {"id": "1", "focal_length": "50mm", "aperture": "T2"},
            {"id": "2", "focal_length": "", "aperture": ""},
            {"id": "3", "focal_length": "zoom", "aperture": "T2.8"},
            {"id": "4", "focal_length": "85mm", "aperture": "T1.8"},
        ],
    }

    with caplog.at_level(logging.WARNING, logger="lens_catalog.providers.mapping"):
        lenses, rentals = map_lens_database(database)

    assert [lens.lens_id for lens in lenses] == ["1", "4"]
    assert rentals == []
    skipped = [record.getMessage() for record in caplog.records]
    assert len(skipped) == 2
    assert all(message.startswith("Skipping lens row") for message in skipped)
    assert "'2'" in skipped[0] and "'3'" in skipped[1]


def test_rentability_follows_listed_rentals_only() -> None:
    database = {
        "lenses": [
            {"id": "1", "focal_length": "50mm", "aperture": "T2"},
            {"id": "2", "focal_length": "35mm", "aperture": "T2"},
            {"id": "3", "focal_length": "25mm", "aperture": "T2"},
        ],
        "rentals": [{"id": "7"}, {"id": "8"}],
        "inventory": [
            {"rental_id": "7", "lens_id": "1"},
            {"rental_id": "8", "lens_id": "1"},
            {"rental_id": "8", "lens_id": "3"},
            {"rental_id": "99", "lens_id": "2"},
        ],
    }

    lenses, _ = map_lens_database(database)

    assert {lens.lens_id: lens.is_rentable for lens in lenses} == {
        "1": True,
        "2": False,
        "3": True,
    }


def test_map_camera_data_attaches_formats(camera_payload: dict[str, Any]) -> None:
    cameras, formats = map_camera_data(camera_payload)

    assert [recording_format.format_id for recording_format in formats] == ["11", "12"]
    alexa, komodo = cameras
    assert alexa.display_name == "ARRI Alexa Mini LF"
    assert alexa.sensor.image_circle == "44.71"
    assert [fmt.name for fmt in alexa.supported_formats] == ["LF Open Gate"]
    assert [fmt.name for fmt in komodo.supported_formats] == ["S35"]


def test_read_json_object_errors(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    listing = tmp_path / "list.json"
    listing.write_text("[]", encoding="utf-8")

    with pytest.raises(DataCorrupted):
        read_json_object(broken)
    with pytest.raises(DataCorrupted):
        read_json_object(listing)
    with pytest.raises(DataCorrupted):
        read_json_object(tmp_path / "missing.json")


@pytest.mark.asyncio
async def test_in_memory_provider_from_json_files(
    tmp_path: Path,
    lens_database_payload: dict[str, Any],
    camera_payload: dict[str, Any],
) -> None:
    catalog_file = tmp_path / "catalog.json"
    catalog_file.write_text(
        json.dumps({"success": True, "database": lens_database_payload}),
        encoding="utf-8",
    )
    camera_file = tmp_path / "CAMERADATA.json"
    camera_file.write_text(json.dumps(camera_payload), encoding="utf-8")

    provider = InMemoryCatalogProvider.from_json_file(catalog_file, camera_file)

    assert [lens.lens_id for lens in await provider.fetch_all_lenses()] == ["101", "102"]
    assert (await provider.fetch_rental("7")) is not None
    assert (await provider.fetch_camera("2")) is not None
    assert len(await provider.fetch_recording_formats()) == 2
    assert await provider.fetch_lens("404") is None

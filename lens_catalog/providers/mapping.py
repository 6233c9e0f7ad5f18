"""Map raw catalog payloads onto immutable domain records.

The lens database API serialises most values as strings (sometimes as bare
numbers), describes focal lengths as text such as ``"24-70mm"`` and apertures
as ``"T2.8"``. The helpers below coerce those shapes and convert every
validation failure into :class:`~lens_catalog.errors.DataCorrupted`.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from lens_catalog.errors import DataCorrupted
from lens_catalog.schemas.catalog import (
    Camera,
    ContactInformation,
    Lens,
    Location,
    RecordingFormat,
    Rental,
    SensorSpecifications,
)
from lens_catalog.services.relations import rentable_lens_ids

logger = logging.getLogger(__name__)

_NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?")
_FORMAT_SEPARATORS = re.compile(r"[,/;]")


def _text(value: Any) -> str | None:
    """Return ``value`` as stripped text; blanks and ``None`` become ``None``."""

    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    text = str(value).strip()
    return text or None


def parse_focal_range(value: Any) -> tuple[float, float]:
    """Parse ``"24-70mm"`` into ``(24.0, 70.0)`` and ``"50mm"`` into ``(50.0, 50.0)``."""

    numbers = [float(match) for match in _NUMBER_PATTERN.findall(_text(value) or "")]
    if not numbers:
        raise DataCorrupted(f"unparseable focal length {value!r}")
    return min(numbers[0], numbers[-1]), max(numbers[0], numbers[-1])


def parse_aperture(value: Any) -> float:
    """Parse ``"T2.8"`` or ``"f/1.4"`` into the fastest listed stop."""

    match = _NUMBER_PATTERN.search(_text(value) or "")
    if match is None:
        raise DataCorrupted(f"unparseable aperture {value!r}")
    return float(match.group())


def parse_formats(*values: Any) -> tuple[str, ...]:
    """Split format strings such as ``"S35 / FF"`` into unique codes."""

    formats: list[str] = []
    for value in values:
        for part in _FORMAT_SEPARATORS.split(_text(value) or ""):
            code = part.strip()
            if code and code not in formats:
                formats.append(code)
    return tuple(formats)


def _require(raw: Mapping[str, Any], key: str, kind: str) -> str:
    value = _text(raw.get(key))
    if value is None:
        raise DataCorrupted(f"{kind} record is missing '{key}'")
    return value


def map_lens(
    raw: Mapping[str, Any], *, rentable_ids: frozenset[str] = frozenset()
) -> Lens:
    lens_id = _require(raw, "id", "lens")
    focal_min, focal_max = parse_focal_range(raw.get("focal_length"))
    try:
        return Lens(
            lens_id=lens_id,
            name=_text(raw.get("display_name")) or _text(raw.get("lens_name")) or lens_id,
            manufacturer=_text(raw.get("manufacturer")) or "",
            model=_text(raw.get("lens_name")),
            description=_text(raw.get("description")),
            focal_length_min=focal_min,
            focal_length_max=focal_max,
            max_aperture=parse_aperture(raw.get("aperture")),
            formats=parse_formats(raw.get("format"), raw.get("lens_format")),
            is_rentable=lens_id in rentable_ids,
            image_circle=_text(raw.get("image_circle")),
            squeeze_factor=_text(raw.get("squeeze_factor")),
            close_focus_cm=_text(raw.get("close_focus_cm")),
            length=_text(raw.get("length")),
            front_diameter=_text(raw.get("front_diameter")),
        )
    except ValidationError as exc:
        raise DataCorrupted(f"invalid lens '{lens_id}': {exc}") from exc


def inventory_by_rental(inventory: Iterable[Mapping[str, Any]]) -> dict[str, set[str]]:
    """Group inventory rows into ``{rental_id: {lens_id, ...}}``."""

    grouped: dict[str, set[str]] = {}
    for row in inventory:
        rental_id = _require(row, "rental_id", "inventory")
        lens_id = _require(row, "lens_id", "inventory")
        grouped.setdefault(rental_id, set()).add(lens_id)
    return grouped


def map_rental(raw: Mapping[str, Any], *, lens_ids: Iterable[str] = ()) -> Rental:
    rental_id = _require(raw, "id", "rental")
    try:
        return Rental(
            rental_id=rental_id,
            name=_text(raw.get("name")) or rental_id,
            contact=ContactInformation(
                phone=_text(raw.get("phone")),
                website=_text(raw.get("website")),
                email=_text(raw.get("email")),
            ),
            location=Location(
                address=_text(raw.get("address")),
                city=_text(raw.get("city")),
                country=_text(raw.get("country")),
            ),
            lens_ids=frozenset(lens_ids),
        )
    except ValidationError as exc:
        raise DataCorrupted(f"invalid rental '{rental_id}': {exc}") from exc


def map_recording_format(raw: Mapping[str, Any]) -> RecordingFormat:
    format_id = _require(raw, "id", "recording format")
    try:
        return RecordingFormat(
            format_id=format_id,
            camera_id=_text(raw.get("cameraid")),
            name=_text(raw.get("recordingformat")) or "",
            width=_text(raw.get("recordingwidth")),
            height=_text(raw.get("recordingheight")),
            image_circle=_text(raw.get("recordingimagecircle")),
        )
    except ValidationError as exc:
        raise DataCorrupted(f"invalid recording format '{format_id}': {exc}") from exc


def map_camera(
    raw: Mapping[str, Any], *, formats: Iterable[RecordingFormat] = ()
) -> Camera:
    camera_id = _require(raw, "id", "camera")
    try:
        return Camera(
            camera_id=camera_id,
            manufacturer=_text(raw.get("manufacturer")) or "",
            model=_text(raw.get("model")) or "",
            sensor=SensorSpecifications(
                type=_text(raw.get("sensor")),
                width=_text(raw.get("sensorwidth")),
                height=_text(raw.get("sensorheight")),
                image_circle=_text(raw.get("imagecircle")),
            ),
            supported_formats=tuple(
                fmt for fmt in formats if fmt.camera_id == camera_id
            ),
        )
    except ValidationError as exc:
        raise DataCorrupted(f"invalid camera '{camera_id}': {exc}") from exc


def _records(payload: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    value = payload.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, Mapping) for item in value):
        raise DataCorrupted(f"'{key}' must be a list of objects")
    return value


def map_lens_database(
    database: Mapping[str, Any],
) -> tuple[list[Lens], list[Rental]]:
    """Map the ``database`` section (lenses, rentals, inventory) to records.

    A malformed section is fatal. A single lens row that cannot be mapped is
    logged and skipped so the rest of the catalog stays usable.
    """

    inventory = inventory_by_rental(_records(database, "inventory"))
    rentals = [
        map_rental(raw, lens_ids=inventory.get(_require(raw, "id", "rental"), ()))
        for raw in _records(database, "rentals")
    ]
    rentable_ids = rentable_lens_ids(rentals)

    lenses: list[Lens] = []
    for raw in _records(database, "lenses"):
        try:
            lenses.append(map_lens(raw, rentable_ids=rentable_ids))
        except DataCorrupted as exc:
            logger.warning("Skipping lens row %r: %s", raw.get("id"), exc.detail)
    return lenses, rentals


def map_camera_data(
    payload: Mapping[str, Any],
) -> tuple[list[Camera], list[RecordingFormat]]:
    """Map a ``{"camera": [...], "formats": [...]}`` payload to records."""

    formats = [map_recording_format(raw) for raw in _records(payload, "formats")]
    cameras = [map_camera(raw, formats=formats) for raw in _records(payload, "camera")]
    return cameras, formats


def read_json_object(path: Path) -> Mapping[str, Any]:
    """Read a JSON object from ``path``; unreadable or malformed files are corrupt data."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise DataCorrupted(f"cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DataCorrupted(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise DataCorrupted(f"{path} must contain a JSON object")
    return payload


__all__ = [
    "inventory_by_rental",
    "map_camera",
    "map_camera_data",
    "map_lens",
    "map_lens_database",
    "map_recording_format",
    "map_rental",
    "parse_aperture",
    "parse_focal_range",
    "parse_formats",
    "read_json_object",
]

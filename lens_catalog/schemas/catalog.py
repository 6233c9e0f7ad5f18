from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lens_catalog.schemas.filters import FocalLengthCategory


class CatalogRecord(BaseModel):
    """Base for immutable catalog records."""

    model_config = ConfigDict(frozen=True)


class Lens(CatalogRecord):
    lens_id: str
    name: str
    manufacturer: str
    model: str | None = None
    description: str | None = None
    focal_length_min: float = Field(ge=0)
    focal_length_max: float = Field(ge=0)
    max_aperture: float = Field(gt=0)
    formats: tuple[str, ...] = ()
    is_rentable: bool = False
    # Informational fields carried through from the catalog source.
    image_circle: str | None = None
    squeeze_factor: str | None = None
    close_focus_cm: str | None = None
    length: str | None = None
    front_diameter: str | None = None

    @model_validator(mode="after")
    def _check_focal_range(self) -> "Lens":
        if self.focal_length_min > self.focal_length_max:
            msg = (
                f"focal_length_min ({self.focal_length_min}) exceeds "
                f"focal_length_max ({self.focal_length_max})"
            )
            raise ValueError(msg)
        return self

    @property
    def is_zoom(self) -> bool:
        return self.focal_length_max > self.focal_length_min

    @property
    def focal_length_category(self) -> FocalLengthCategory:
        """Category of the lens's main (shortest) focal length."""

        return FocalLengthCategory.for_focal_length(self.focal_length_min)


class RecordingFormat(CatalogRecord):
    format_id: str
    camera_id: str | None = None
    name: str
    width: str | None = None
    height: str | None = None
    image_circle: str | None = None

    def is_compatible_with(self, lens_format: str) -> bool:
        """Return ``True`` when this format's name appears in ``lens_format``."""

        name = self.name.strip().lower()
        return bool(name) and name in lens_format.lower()


class SensorSpecifications(CatalogRecord):
    type: str | None = None
    width: str | None = None
    height: str | None = None
    image_circle: str | None = None


class Camera(CatalogRecord):
    camera_id: str
    manufacturer: str
    model: str
    sensor: SensorSpecifications = Field(default_factory=SensorSpecifications)
    supported_formats: tuple[RecordingFormat, ...] = ()

    @property
    def display_name(self) -> str:
        return f"{self.manufacturer} {self.model}"

    def is_compatible_with(self, lens: Lens) -> bool:
        return any(
            recording_format.is_compatible_with(lens_format)
            for recording_format in self.supported_formats
            for lens_format in lens.formats
        )


class ContactInformation(CatalogRecord):
    phone: str | None = None
    website: str | None = None
    email: str | None = None


class Location(CatalogRecord):
    address: str | None = None
    city: str | None = None
    country: str | None = None


class Rental(CatalogRecord):
    rental_id: str
    name: str
    contact: ContactInformation = Field(default_factory=ContactInformation)
    location: Location | None = None
    # Identifiers only; lenses are resolved through the relation helpers.
    lens_ids: frozenset[str] = frozenset()


class LensSeries(CatalogRecord):
    name: str
    lenses: tuple[Lens, ...] = ()


class LensGroup(CatalogRecord):
    manufacturer: str
    series: tuple[LensSeries, ...] = ()

    @property
    def lens_count(self) -> int:
        return sum(len(series.lenses) for series in self.series)


class CompatibilityLevel(str, Enum):
    FULL = "full"
    PARTIAL = "partial"
    NONE = "none"

    @property
    def display_name(self) -> str:
        return {
            CompatibilityLevel.FULL: "Fully Compatible",
            CompatibilityLevel.PARTIAL: "Partially Compatible",
            CompatibilityLevel.NONE: "Not Compatible",
        }[self]


class CompatibilityResult(CatalogRecord):
    is_compatible: bool
    level: CompatibilityLevel
    notes: tuple[str, ...] = ()

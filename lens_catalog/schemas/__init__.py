"""Pydantic schemas for catalog records, filter criteria and error payloads."""

from lens_catalog.schemas.catalog import (
    Camera,
    CompatibilityLevel,
    CompatibilityResult,
    ContactInformation,
    Lens,
    LensGroup,
    LensSeries,
    Location,
    RecordingFormat,
    Rental,
    SensorSpecifications,
)
from lens_catalog.schemas.error import ErrorResponse, ErrorType
from lens_catalog.schemas.filters import FocalLengthCategory, LensFilterCriteria

__all__ = [
    "Camera",
    "CompatibilityLevel",
    "CompatibilityResult",
    "ContactInformation",
    "ErrorResponse",
    "ErrorType",
    "FocalLengthCategory",
    "Lens",
    "LensFilterCriteria",
    "LensGroup",
    "LensSeries",
    "Location",
    "RecordingFormat",
    "Rental",
    "SensorSpecifications",
]

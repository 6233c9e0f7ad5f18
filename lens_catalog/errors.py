"""Domain errors raised by the catalog core.

The set is closed: callers can rely on every failure surfacing as one of the
six :class:`CatalogError` subclasses below. Each carries a human-readable
``message`` and an :class:`~lens_catalog.schemas.error.ErrorType` so the
presentation layer can tell them apart (for example, to show a dedicated
"4 items max" hint for :class:`MaxComparisonItemsReached`).
"""

from __future__ import annotations

from lens_catalog.schemas.error import ErrorType

MAX_COMPARISON_ITEMS = 4


class CatalogError(Exception):
    """Base class for recoverable catalog failures."""

    error_type: ErrorType

    def __init__(self, message: str, *, identifier: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.identifier = identifier


class LensNotFound(CatalogError):
    error_type = ErrorType.LENS_NOT_FOUND

    def __init__(self, lens_id: str) -> None:
        super().__init__(f"Lens with ID '{lens_id}' not found", identifier=lens_id)
        self.lens_id = lens_id


class CameraNotFound(CatalogError):
    error_type = ErrorType.CAMERA_NOT_FOUND

    def __init__(self, camera_id: str) -> None:
        super().__init__(
            f"Camera with ID '{camera_id}' not found", identifier=camera_id
        )
        self.camera_id = camera_id


class RentalNotFound(CatalogError):
    error_type = ErrorType.RENTAL_NOT_FOUND

    def __init__(self, rental_id: str) -> None:
        super().__init__(
            f"Rental with ID '{rental_id}' not found", identifier=rental_id
        )
        self.rental_id = rental_id


class NetworkError(CatalogError):
    """Transport-level failure while talking to a catalog source."""

    error_type = ErrorType.NETWORK_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(f"Network error: {message}")
        self.detail = message


class DataCorrupted(CatalogError):
    """Catalog or preference data failed an integrity check."""

    error_type = ErrorType.DATA_CORRUPTED

    def __init__(self, message: str) -> None:
        super().__init__(f"Data corrupted: {message}")
        self.detail = message


class MaxComparisonItemsReached(CatalogError):
    """Raised when adding a new lens to a full comparison set."""

    error_type = ErrorType.MAX_COMPARISON_ITEMS_REACHED

    def __init__(self, capacity: int = MAX_COMPARISON_ITEMS) -> None:
        super().__init__(
            f"Maximum comparison items reached ({capacity} items max)"
        )
        self.capacity = capacity


__all__ = [
    "CameraNotFound",
    "CatalogError",
    "DataCorrupted",
    "LensNotFound",
    "MAX_COMPARISON_ITEMS",
    "MaxComparisonItemsReached",
    "NetworkError",
    "RentalNotFound",
]

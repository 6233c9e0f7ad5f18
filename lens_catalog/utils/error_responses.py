"""Helpers for turning catalog errors into structured payloads.

Keeping payload construction in one module means every caller (UI adapters,
CLI tools, logs) renders failures with the same shape. The builder stamps a
timezone-aware timestamp automatically.
"""

from __future__ import annotations

from datetime import UTC, datetime

from lens_catalog.errors import CatalogError
from lens_catalog.schemas.error import ErrorResponse

__all__ = [
    "build_error_response",
]


def _current_timestamp() -> datetime:
    """Return a timezone-aware timestamp for error payloads.

    Splitting the call into a tiny helper makes it trivial for unit tests to
    monkeypatch the clock and assert against deterministic values.
    """

    return datetime.now(UTC)


def build_error_response(error: CatalogError) -> ErrorResponse:
    """Construct an ``ErrorResponse`` describing ``error``."""

    return ErrorResponse(
        error_type=error.error_type,
        message=error.message,
        identifier=error.identifier,
        timestamp=_current_timestamp(),
    )

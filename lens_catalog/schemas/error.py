"""Error payload schemas for consistent, human-readable failure reporting."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ErrorType(str, Enum):
    """Closed set of failure kinds the catalog core can report."""

    LENS_NOT_FOUND = "lens_not_found"
    CAMERA_NOT_FOUND = "camera_not_found"
    RENTAL_NOT_FOUND = "rental_not_found"
    NETWORK_ERROR = "network_error"
    DATA_CORRUPTED = "data_corrupted"
    MAX_COMPARISON_ITEMS_REACHED = "max_comparison_items_reached"


class ErrorResponse(BaseModel):
    """Standardized error payload handed to the presentation layer."""

    error_type: ErrorType = Field(..., description="Category of error")
    message: str = Field(..., description="Human-readable error message")
    identifier: str | None = Field(
        None, description="Identifier of the missing record for not-found errors"
    )
    timestamp: datetime = Field(..., description="When the error was reported")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_type": "lens_not_found",
                "message": "Lens with ID 'cooke-s4-32' not found",
                "identifier": "cooke-s4-32",
                "timestamp": "2025-11-03T10:30:00Z",
            }
        }
    )

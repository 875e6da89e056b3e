"""
Pydantic schemas for request validation.

This module separates the API-facing request schemas from the Beanie
document. Validation here is pure: it never touches the database, so it can be
exercised on its own and runs before anything is persisted.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import ValidationException
from db.models import (
    DEFAULT_TITLE,
    DEFAULT_USER_ID,
    TIMESTAMP_FIELDS,
    Coordinate,
    DistanceUnit,
    JourneyStatus,
    SpeedAlert,
    SpeedDrop,
    SpeedSample,
    VehicleType,
    coerce_timestamp,
    unique_tags,
)

VALIDATION_FAILED_PREFIX = "Journey validation failed"


class JourneyCreate(BaseModel):
    """Request body for creating a journey."""

    title: str = DEFAULT_TITLE
    startTime: datetime
    endTime: datetime
    totalDuration: float
    averageSpeed: float
    maxSpeed: float
    currentSpeed: float = 0
    totalDistance: float
    distanceUnit: DistanceUnit = "km"
    detectedVehicle: VehicleType = "car"
    coordinates: list[Coordinate] = Field(default_factory=list)
    speedHistory: list[SpeedSample] = Field(default_factory=list)
    speedDrops: list[SpeedDrop] = Field(default_factory=list)
    speedAlerts: list[SpeedAlert] = Field(default_factory=list)
    userId: str = DEFAULT_USER_ID
    tags: list[str] = Field(default_factory=list)
    notes: str | None = None
    status: JourneyStatus = "completed"

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    @field_validator(*TIMESTAMP_FIELDS[:2], mode="before")
    @classmethod
    def parse_datetime_fields(cls, v: Any) -> Any:
        return coerce_timestamp(v)

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: list[str] | None) -> list[str] | None:
        return unique_tags(v)


class JourneyUpdate(BaseModel):
    """Request body for a partial journey update; only sent keys are applied."""

    title: str | None = None
    startTime: datetime | None = None
    endTime: datetime | None = None
    totalDuration: float | None = None
    averageSpeed: float | None = None
    maxSpeed: float | None = None
    currentSpeed: float | None = None
    totalDistance: float | None = None
    distanceUnit: DistanceUnit | None = None
    detectedVehicle: VehicleType | None = None
    coordinates: list[Coordinate] | None = None
    speedHistory: list[SpeedSample] | None = None
    speedDrops: list[SpeedDrop] | None = None
    speedAlerts: list[SpeedAlert] | None = None
    userId: str | None = None
    tags: list[str] | None = None
    notes: str | None = None
    status: JourneyStatus | None = None

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    @field_validator(*TIMESTAMP_FIELDS[:2], mode="before")
    @classmethod
    def parse_datetime_fields(cls, v: Any) -> Any:
        return coerce_timestamp(v)

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: list[str] | None) -> list[str] | None:
        return unique_tags(v)


# ``notes`` is the only field a client may clear by sending null.
NULLABLE_FIELDS = frozenset({"notes"})
NON_NULLABLE_FIELDS = frozenset(JourneyUpdate.model_fields) - NULLABLE_FIELDS


class FieldError(BaseModel):
    """One problem found in a request body."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


def _errors_from_pydantic(exc: PydanticValidationError) -> list[FieldError]:
    errors = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "body"
        errors.append(FieldError(field=field, message=error.get("msg", "Invalid value")))
    return errors


def collect_validation_errors(payload: Any, *, partial: bool = False) -> list[FieldError]:
    """
    Validate a request body and return every problem found.

    Args:
        payload: Decoded JSON body.
        partial: Validate as an update, where every field is optional but
            required fields still cannot be set to null.

    Returns:
        Structured error list; empty when the payload is valid.
    """
    if not isinstance(payload, dict):
        return [FieldError(field="body", message="Expected a JSON object")]

    errors: list[FieldError] = []
    if partial:
        errors.extend(
            FieldError(field=field, message="Field cannot be null")
            for field, value in payload.items()
            if value is None and field in NON_NULLABLE_FIELDS
        )

    schema = JourneyUpdate if partial else JourneyCreate
    try:
        schema.model_validate(payload)
    except PydanticValidationError as exc:
        errors.extend(_errors_from_pydantic(exc))
    return errors


def format_validation_message(errors: list[FieldError]) -> str:
    return f"{VALIDATION_FAILED_PREFIX}: " + ", ".join(str(error) for error in errors)


def _raise_for_errors(errors: list[FieldError]) -> None:
    if errors:
        raise ValidationException(
            format_validation_message(errors),
            details={"errors": [error.model_dump() for error in errors]},
        )


def validate_journey_create(payload: Any) -> JourneyCreate:
    """Validate a create body, raising ValidationException on failure."""
    _raise_for_errors(collect_validation_errors(payload))
    return JourneyCreate.model_validate(payload)


def validate_journey_update(payload: Any) -> dict[str, Any]:
    """
    Validate an update body, raising ValidationException on failure.

    Returns:
        Validated values keyed by field, limited to the known fields the
        client actually sent.
    """
    _raise_for_errors(collect_validation_errors(payload, partial=True))
    update = JourneyUpdate.model_validate(payload)
    return {field: getattr(update, field) for field in update.model_fields_set}

"""Beanie ODM document models for MongoDB collections.

This module defines the journey document and its embedded samples using
Beanie ODM, which provides:
- Automatic Pydantic validation
- Built-in async CRUD operations
- Proper ObjectId/datetime serialization
- Index definitions at the model level

Usage:
    from db.models import Journey

    journey = await Journey.get(journey_id)
    journeys = await Journey.find({"detectedVehicle": "bus"}).to_list()
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, get_args

from beanie import Document, PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pymongo import ASCENDING, DESCENDING, IndexModel

from date_utils import parse_timestamp

DEFAULT_TITLE = "Untitled Journey"
DEFAULT_USER_ID = "guest"

VehicleType = Literal["stationary", "walking", "bike", "car", "bus", "train", "flight"]
DistanceUnit = Literal["km", "miles"]
JourneyStatus = Literal["active", "completed", "paused"]

VEHICLE_TYPES: tuple[str, ...] = get_args(VehicleType)
DISTANCE_UNITS: tuple[str, ...] = get_args(DistanceUnit)
JOURNEY_STATUSES: tuple[str, ...] = get_args(JourneyStatus)

# Heavy arrays left out of list-style responses.
LIST_EXCLUDED_FIELDS: tuple[str, ...] = ("speedHistory", "coordinates")

TIMESTAMP_FIELDS: tuple[str, ...] = ("startTime", "endTime", "createdAt", "updatedAt")


def coerce_timestamp(v: Any) -> Any:
    """Parse a timestamp-like value, leaving unparseable input for Pydantic to reject."""
    if v is None:
        return None
    parsed = parse_timestamp(v)
    return parsed if parsed is not None else v


def unique_tags(tags: list[str] | None) -> list[str] | None:
    """Drop repeated tags, keeping the first occurrence of each."""
    if tags is None:
        return None
    return list(dict.fromkeys(tags))


# ============================================================================
# Embedded samples
# ============================================================================


# Writable models set allow_inf_nan=False: NaN and Infinity cannot be rendered as JSON.


class GeoPoint(BaseModel):
    """A bare latitude/longitude pair."""

    lat: float | None = None
    lng: float | None = None

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)


class Coordinate(BaseModel):
    """One recorded GPS fix along the route."""

    lat: float | None = None
    lng: float | None = None
    timestamp: float | None = None
    speed: float | None = None
    accuracy: float | None = None

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)


class SpeedSample(BaseModel):
    speed: float | None = None
    timestamp: float | None = None
    location: GeoPoint | None = None

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)


class SpeedDrop(BaseModel):
    """A sudden deceleration detected by the client."""

    timestamp: float | None = None
    fromSpeed: float | None = None
    toSpeed: float | None = None
    location: GeoPoint | None = None

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)


class SpeedAlert(BaseModel):
    """A moment where the speed exceeded the configured limit."""

    timestamp: float | None = None
    speed: float | None = None
    limit: float | None = None
    location: GeoPoint | None = None

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)


# ============================================================================
# Journey document
# ============================================================================


class Journey(Document):
    """Journey document representing one recorded trip."""

    title: str = DEFAULT_TITLE

    # Time tracking
    startTime: datetime
    endTime: datetime
    totalDuration: float  # seconds

    # Speed metrics
    averageSpeed: float
    maxSpeed: float
    currentSpeed: float = 0

    # Distance
    totalDistance: float  # kilometers
    distanceUnit: DistanceUnit = "km"

    detectedVehicle: VehicleType = "car"

    # Route and time-series data
    coordinates: list[Coordinate] = Field(default_factory=list)
    speedHistory: list[SpeedSample] = Field(default_factory=list)
    speedDrops: list[SpeedDrop] = Field(default_factory=list)
    speedAlerts: list[SpeedAlert] = Field(default_factory=list)

    # Metadata
    userId: str = DEFAULT_USER_ID
    tags: list[str] = Field(default_factory=list)
    notes: str | None = None
    status: JourneyStatus = "completed"

    createdAt: datetime | None = None
    updatedAt: datetime | None = None

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    @field_validator(*TIMESTAMP_FIELDS, mode="before")
    @classmethod
    def parse_datetime_fields(cls, v: Any) -> Any:
        """Parse datetime fields using the centralized date_utils."""
        return coerce_timestamp(v)

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: list[str]) -> list[str]:
        return unique_tags(v)

    class Settings:
        name = "journeys"
        indexes = [
            IndexModel([("startTime", DESCENDING)], name="journeys_startTime_desc_idx"),
            IndexModel([("userId", ASCENDING)], name="journeys_userId_idx"),
            IndexModel(
                [("detectedVehicle", ASCENDING)],
                name="journeys_detectedVehicle_idx",
            ),
        ]


class JourneySummary(BaseModel):
    """Projection model for list views; drops the route and speed history."""

    id: PydanticObjectId | None = Field(default=None, alias="_id")
    title: str | None = None
    startTime: datetime | None = None
    endTime: datetime | None = None
    totalDuration: float | None = None
    averageSpeed: float | None = None
    maxSpeed: float | None = None
    currentSpeed: float | None = None
    totalDistance: float | None = None
    distanceUnit: str | None = None
    detectedVehicle: str | None = None
    speedDrops: list[SpeedDrop] = Field(default_factory=list)
    speedAlerts: list[SpeedAlert] = Field(default_factory=list)
    userId: str | None = None
    tags: list[str] = Field(default_factory=list)
    notes: str | None = None
    status: str | None = None
    createdAt: datetime | None = None
    updatedAt: datetime | None = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator(*TIMESTAMP_FIELDS, mode="before")
    @classmethod
    def parse_datetime_fields(cls, v: Any) -> Any:
        return coerce_timestamp(v)

    class Settings:
        projection = {field: 0 for field in LIST_EXCLUDED_FIELDS}


ALL_DOCUMENT_MODELS = [
    Journey,
]

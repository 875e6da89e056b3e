"""
Query building utilities for MongoDB.

Turns raw request parameters into MongoDB filter, sort and limit values.
Every parser raises ``ValueError`` on malformed input; route handlers report
those as unexpected errors.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from beanie import PydanticObjectId
from bson import ObjectId
from pymongo import ASCENDING, DESCENDING

from date_utils import normalize_to_utc_datetime, to_storage_datetime

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 50
DEFAULT_LIST_SORT = "-startTime"
SIMILAR_DISTANCE_TOLERANCE = 0.2
SIMILAR_LIMIT = 5


def parse_query_date(
    date_str: str | None,
    end_of_day: bool = False,
) -> datetime | None:
    """
    Parse a date string for query filtering.

    Handles both date-only strings (YYYY-MM-DD) and full ISO datetime strings.
    For date-only strings, can optionally set to end of day.

    Args:
        date_str: Date string to parse (YYYY-MM-DD or ISO format).
        end_of_day: If True and date_str is date-only, set time to 23:59:59.999999.

    Returns:
        Parsed datetime in UTC, or None when no value was given.

    Raises:
        ValueError: If a value was given but cannot be parsed.
    """
    if not date_str:
        return None

    dt = normalize_to_utc_datetime(date_str)
    if dt is None:
        msg = f"Invalid date: {date_str!r}"
        raise ValueError(msg)

    is_date_only = "T" not in date_str and "t" not in date_str and " " not in date_str.strip()

    if is_date_only:
        if end_of_day:
            return dt.replace(hour=23, minute=59, second=59, microsecond=999999)
        return dt.replace(hour=0, minute=0, second=0, microsecond=0)

    return dt


def parse_float_param(name: str, value: str | None) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except ValueError:
        msg = f"Invalid {name}: {value!r} is not a number"
        raise ValueError(msg) from None


def parse_limit(value: str | int | None, default: int = DEFAULT_LIST_LIMIT) -> int | None:
    """
    Parse a ``limit`` query parameter.

    Returns None for "no limit" (``0``). Negative values use their absolute
    value, as MongoDB does.
    """
    if value is None or value == "":
        return default
    try:
        limit = int(value)
    except (TypeError, ValueError):
        msg = f"Invalid limit: {value!r} is not an integer"
        raise ValueError(msg) from None
    limit = abs(limit)
    return limit or None


def parse_sort(value: str | None, default: str = DEFAULT_LIST_SORT) -> list[tuple[str, int]]:
    """
    Parse a Mongoose-style sort string into PyMongo sort pairs.

    ``"-startTime totalDistance"`` becomes
    ``[("startTime", DESCENDING), ("totalDistance", ASCENDING)]``.
    """
    raw = value if value and value.strip() else default
    pairs: list[tuple[str, int]] = []
    for token in raw.replace(",", " ").split():
        direction = ASCENDING
        if token[0] in "+-":
            direction = DESCENDING if token[0] == "-" else ASCENDING
            token = token[1:]
        if not token or token.startswith("$"):
            msg = f"Invalid sort field in {raw!r}"
            raise ValueError(msg)
        pairs.append((token, direction))
    return pairs


def parse_object_id(value: str) -> PydanticObjectId | None:
    """Return the ObjectId for ``value``, or None when it cannot be one."""
    if not ObjectId.is_valid(value):
        return None
    return PydanticObjectId(value)


def build_journey_filter(
    *,
    vehicle_type: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    min_distance: str | None = None,
) -> dict[str, Any]:
    """
    Build the MongoDB filter for the journey list.

    Args:
        vehicle_type: Exact ``detectedVehicle`` match.
        start_date: Inclusive lower bound on ``startTime``.
        end_date: Inclusive upper bound on ``startTime``; date-only values
            cover the whole day.
        min_distance: Inclusive lower bound on ``totalDistance``.

    Returns:
        MongoDB query dictionary.
    """
    query: dict[str, Any] = {}

    if vehicle_type:
        query["detectedVehicle"] = vehicle_type

    start = parse_query_date(start_date)
    end = parse_query_date(end_date, end_of_day=True)
    if start or end:
        time_range: dict[str, Any] = {}
        if start:
            time_range["$gte"] = to_storage_datetime(start)
        if end:
            time_range["$lte"] = to_storage_datetime(end)
        query["startTime"] = time_range

    distance = parse_float_param("minDistance", min_distance)
    if distance is not None:
        query["totalDistance"] = {"$gte": distance}

    logger.debug("Built journey filter: %s", query)
    return query


def build_similar_filter(
    journey_id: PydanticObjectId,
    detected_vehicle: str,
    total_distance: float,
    tolerance: float = SIMILAR_DISTANCE_TOLERANCE,
) -> dict[str, Any]:
    """Filter for journeys of the same vehicle within ``tolerance`` of the distance."""
    return {
        "_id": {"$ne": journey_id},
        "detectedVehicle": detected_vehicle,
        "totalDistance": {
            "$gte": total_distance * (1 - tolerance),
            "$lte": total_distance * (1 + tolerance),
        },
    }

"""Serialization utilities for journey data."""

from __future__ import annotations

from typing import Any

from db.models import Journey, JourneySummary


def serialize_journey(journey: Journey | JourneySummary) -> dict[str, Any]:
    """
    Convert a journey into its JSON response shape.

    The id is exposed as both ``_id`` and ``id`` and the virtual
    ``journeyDate`` mirrors ``startTime``.
    """
    data = journey.model_dump(mode="json", exclude={"revision_id"})
    journey_id = data.pop("id", None)
    return {
        "_id": journey_id,
        "id": journey_id,
        **data,
        "journeyDate": data.get("startTime"),
    }


def serialize_journeys(journeys: list[Journey | JourneySummary]) -> list[dict[str, Any]]:
    return [serialize_journey(journey) for journey in journeys]

"""Aggregation helpers for Beanie document models."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable


async def aggregate_to_list(
    model: Any,
    pipeline: Iterable[dict[str, Any]],
    *,
    length: int | None = None,
    **kwargs: Any,
) -> list[dict[str, Any]]:
    """
    Run an aggregation pipeline and return results as a list of raw dicts.

    Results are not parsed into the model; ``$group`` output has a different
    shape than the documents it summarizes.
    """
    return await model.aggregate(list(pipeline), **kwargs).to_list(length=length)


def overall_stats_pipeline() -> list[dict[str, Any]]:
    """Collection-wide totals across every journey, as a single ``_id: null`` row."""
    return [
        {
            "$group": {
                "_id": None,
                "totalJourneys": {"$sum": 1},
                "totalDistance": {"$sum": "$totalDistance"},
                "totalDuration": {"$sum": "$totalDuration"},
                "avgSpeed": {"$avg": "$averageSpeed"},
                "maxSpeedEver": {"$max": "$maxSpeed"},
            },
        },
    ]


def vehicle_breakdown_pipeline() -> list[dict[str, Any]]:
    """Journey counts grouped by detected vehicle."""
    return [
        {
            "$group": {
                "_id": "$detectedVehicle",
                "count": {"$sum": 1},
            },
        },
    ]

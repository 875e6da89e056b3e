"""Business logic for journey statistics."""

import logging
from typing import Any

from db.aggregation import overall_stats_pipeline, vehicle_breakdown_pipeline
from db.store import JourneyStore

logger = logging.getLogger(__name__)


class JourneyStatsService:
    """Service class for collection-wide journey statistics."""

    def __init__(self, store: JourneyStore) -> None:
        self.store = store

    async def get_summary(self) -> dict[str, Any]:
        """
        Summarize every stored journey.

        Returns:
            dict with ``overall`` totals (empty when there are no journeys)
            and ``byVehicle`` counts keyed by ``_id`` = vehicle type
        """
        overall = await self.store.aggregate(overall_stats_pipeline())
        by_vehicle = await self.store.aggregate(vehicle_breakdown_pipeline())
        # Some backends emit a zero-count row for $group over nothing.
        totals = overall[0] if overall and overall[0].get("totalJourneys") else {}
        return {
            "overall": totals,
            "byVehicle": by_vehicle,
        }

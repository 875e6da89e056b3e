"""Business logic for journey listing and comparison queries."""

import logging

from core.exceptions import ResourceNotFoundException
from db.models import JourneySummary
from db.query import (
    SIMILAR_LIMIT,
    build_journey_filter,
    build_similar_filter,
    parse_limit,
    parse_sort,
)
from db.store import JourneyStore
from journeys.services.journey_crud_service import JOURNEY_NOT_FOUND

logger = logging.getLogger(__name__)


class JourneyQueryService:
    """Service class for filtered journey lists and similar-journey lookups."""

    def __init__(self, store: JourneyStore) -> None:
        self.store = store

    async def list_journeys(
        self,
        vehicle_type: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
        min_distance: str | None = None,
        limit: str | None = None,
        sort: str | None = None,
    ) -> list[JourneySummary]:
        """List journeys matching the given filters.

        Args:
            vehicle_type: Exact detected vehicle match
            start_date: Inclusive lower bound on start time
            end_date: Inclusive upper bound on start time
            min_distance: Minimum total distance
            limit: Maximum number of journeys (default 50, 0 for all)
            sort: Mongoose-style sort string (default ``-startTime``)

        Returns:
            Journey summaries without route or speed history

        Raises:
            ValueError: If a parameter cannot be parsed
        """
        query = build_journey_filter(
            vehicle_type=vehicle_type,
            start_date=start_date,
            end_date=end_date,
            min_distance=min_distance,
        )
        return await self.store.find_many(
            query,
            sort=parse_sort(sort),
            limit=parse_limit(limit),
        )

    async def find_similar(self, journey_id: str) -> list[JourneySummary]:
        """Find up to five journeys by the same vehicle with a comparable distance.

        Raises:
            ResourceNotFoundException: If the reference journey does not exist
        """
        journey = await self.store.find_by_id(journey_id)
        if journey is None:
            raise ResourceNotFoundException(JOURNEY_NOT_FOUND)

        query = build_similar_filter(
            journey.id,
            journey.detectedVehicle,
            journey.totalDistance,
        )
        similar = await self.store.find_many(query, limit=SIMILAR_LIMIT)
        logger.debug("Found %d journeys similar to %s", len(similar), journey_id)
        return similar

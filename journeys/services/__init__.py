"""Journey services."""

from journeys.services.journey_crud_service import JourneyCrudService
from journeys.services.journey_query_service import JourneyQueryService
from journeys.services.journey_stats_service import JourneyStatsService

__all__ = [
    "JourneyCrudService",
    "JourneyQueryService",
    "JourneyStatsService",
]

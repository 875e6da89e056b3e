"""API routes for journey listing and comparison."""

import logging

from fastapi import APIRouter, Depends, Query

from core.api import api_route, success_response
from db.store import JourneyStore
from journeys.dependencies import get_journey_store
from journeys.serializers import serialize_journeys
from journeys.services import JourneyQueryService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/journeys", tags=["Journeys API"])
@api_route(logger)
async def list_journeys(
    vehicleType: str | None = Query(None, description="Filter by detected vehicle"),
    startDate: str | None = Query(None, description="Earliest start time (inclusive)"),
    endDate: str | None = Query(None, description="Latest start time (inclusive)"),
    minDistance: str | None = Query(None, description="Minimum total distance"),
    limit: str | None = Query(None, description="Maximum results, default 50"),
    sort: str | None = Query(None, description="Sort fields, default -startTime"),
    store: JourneyStore = Depends(get_journey_store),
):
    """List journeys without their route and speed history."""
    journeys = await JourneyQueryService(store).list_journeys(
        vehicle_type=vehicleType,
        start_date=startDate,
        end_date=endDate,
        min_distance=minDistance,
        limit=limit,
        sort=sort,
    )
    return success_response(serialize_journeys(journeys), count=len(journeys))


@router.get("/api/journeys/{journey_id}/similar", tags=["Journeys API"])
@api_route(logger)
async def get_similar_journeys(
    journey_id: str,
    store: JourneyStore = Depends(get_journey_store),
):
    """Journeys by the same vehicle whose distance is within 20%."""
    journeys = await JourneyQueryService(store).find_similar(journey_id)
    return success_response(serialize_journeys(journeys), count=len(journeys))

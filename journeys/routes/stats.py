"""API routes for journey statistics."""

import logging

from fastapi import APIRouter, Depends

from core.api import api_route, success_response
from db.store import JourneyStore
from journeys.dependencies import get_journey_store
from journeys.services import JourneyStatsService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/journeys/stats/summary", tags=["Journeys API"])
@api_route(logger)
async def get_journey_stats(store: JourneyStore = Depends(get_journey_store)):
    """Totals across all journeys plus a per-vehicle breakdown."""
    summary = await JourneyStatsService(store).get_summary()
    return success_response(summary)

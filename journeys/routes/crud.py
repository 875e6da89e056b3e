"""API routes for journey CRUD operations."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status

from core.api import api_route, success_response
from db.store import JourneyStore
from journeys.dependencies import get_journey_store
from journeys.serializers import serialize_journey
from journeys.services import JourneyCrudService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/journeys/{journey_id}", tags=["Journeys API"])
@api_route(logger)
async def get_single_journey(
    journey_id: str,
    store: JourneyStore = Depends(get_journey_store),
):
    """Get a single journey, including its route and speed history."""
    journey = await JourneyCrudService(store).get_journey(journey_id)
    return success_response(serialize_journey(journey))


@router.post("/api/journeys", tags=["Journeys API"])
@api_route(logger)
async def create_journey(
    payload: Any = Body(...),
    store: JourneyStore = Depends(get_journey_store),
):
    """Create a journey from a full document."""
    journey = await JourneyCrudService(store).create_journey(payload)
    return success_response(
        serialize_journey(journey),
        status_code=status.HTTP_201_CREATED,
    )


@router.put("/api/journeys/{journey_id}", tags=["Journeys API"])
@api_route(logger)
async def update_journey(
    journey_id: str,
    payload: Any = Body(...),
    store: JourneyStore = Depends(get_journey_store),
):
    """Update the fields present in the body; other fields are kept."""
    journey = await JourneyCrudService(store).update_journey(journey_id, payload)
    return success_response(serialize_journey(journey))


@router.delete("/api/journeys/{journey_id}", tags=["Journeys API"])
@api_route(logger)
async def delete_journey(
    journey_id: str,
    store: JourneyStore = Depends(get_journey_store),
):
    """Delete a journey by its id."""
    await JourneyCrudService(store).delete_journey(journey_id)
    return success_response(message="Journey deleted successfully")

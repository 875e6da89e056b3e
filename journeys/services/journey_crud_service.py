"""Business logic for journey CRUD operations."""

import logging
from typing import Any

from core.exceptions import ResourceNotFoundException
from db.models import Journey
from db.schemas import validate_journey_create, validate_journey_update
from db.store import JourneyStore

logger = logging.getLogger(__name__)

JOURNEY_NOT_FOUND = "Journey not found"


class JourneyCrudService:
    """Service class for journey create, read, update, and delete operations."""

    def __init__(self, store: JourneyStore) -> None:
        self.store = store

    async def get_journey(self, journey_id: str) -> Journey:
        """Get a single journey including its route and speed history.

        Raises:
            ResourceNotFoundException: If no journey has this id
        """
        journey = await self.store.find_by_id(journey_id)
        if journey is None:
            raise ResourceNotFoundException(JOURNEY_NOT_FOUND)
        return journey

    async def create_journey(self, payload: Any) -> Journey:
        """Validate a request body and store it as a new journey.

        Raises:
            ValidationException: If the body does not describe a valid journey
        """
        journey_data = validate_journey_create(payload)
        return await self.store.insert(journey_data)

    async def update_journey(self, journey_id: str, payload: Any) -> Journey:
        """Merge the fields present in ``payload`` into an existing journey.

        Fields the client did not send keep their stored values.

        Raises:
            ValidationException: If a sent field is invalid
            ResourceNotFoundException: If no journey has this id
        """
        changes = validate_journey_update(payload)
        journey = await self.store.update_by_id(journey_id, changes)
        if journey is None:
            raise ResourceNotFoundException(JOURNEY_NOT_FOUND)
        return journey

    async def delete_journey(self, journey_id: str) -> None:
        """Delete a journey.

        Raises:
            ResourceNotFoundException: If no journey has this id
        """
        if not await self.store.delete_by_id(journey_id):
            raise ResourceNotFoundException(JOURNEY_NOT_FOUND)

"""Persistence layer for journeys.

``JourneyStore`` is the only place that talks to the ``journeys``
collection. Handlers receive an instance through FastAPI dependency
injection, so tests can swap in a store bound to an in-memory database.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from beanie import UpdateResponse
from pydantic import BaseModel
from pymongo.errors import PyMongoError

from core.exceptions import DatabaseException
from date_utils import get_current_utc_time
from db.aggregation import aggregate_to_list
from db.models import Journey, JourneySummary
from db.query import parse_object_id

if TYPE_CHECKING:
    from db.schemas import JourneyCreate

logger = logging.getLogger(__name__)


def _to_document_value(value: Any) -> Any:
    """Convert validated embedded models into plain BSON-ready values."""
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, list):
        return [_to_document_value(item) for item in value]
    return value


class JourneyStore:
    """CRUD and aggregation access to the journeys collection."""

    def __init__(self, model: type[Journey] = Journey) -> None:
        self.model = model

    async def insert(self, journey_data: JourneyCreate) -> Journey:
        """
        Insert a validated journey.

        Args:
            journey_data: Validated create request

        Returns:
            The stored journey with generated id and timestamps
        """
        now = get_current_utc_time()
        journey = self.model.model_validate(
            {**journey_data.model_dump(), "createdAt": now, "updatedAt": now},
        )
        try:
            await journey.insert()
        except PyMongoError as e:
            raise DatabaseException(f"Failed to insert journey: {e}") from e
        logger.info("Inserted journey %s (%s)", journey.id, journey.detectedVehicle)
        return journey

    async def find_by_id(self, journey_id: str) -> Journey | None:
        """Return the full journey, or None if the id matches nothing."""
        object_id = parse_object_id(journey_id)
        if object_id is None:
            logger.debug("Ignoring malformed journey id %r", journey_id)
            return None
        return await self.model.get(object_id)

    async def find_many(
        self,
        query: dict[str, Any],
        sort: list[tuple[str, int]] | None = None,
        limit: int | None = None,
    ) -> list[JourneySummary]:
        """
        Find journeys matching ``query`` in list projection.

        Args:
            query: MongoDB filter
            sort: PyMongo sort pairs, applied in order
            limit: Maximum number of results, None for no limit

        Returns:
            Journey summaries without route or speed history
        """
        cursor = self.model.find(query).project(JourneySummary)
        if sort:
            cursor = cursor.sort(sort)
        if limit:
            cursor = cursor.limit(limit)
        return await cursor.to_list()

    async def update_by_id(
        self,
        journey_id: str,
        changes: dict[str, Any],
    ) -> Journey | None:
        """
        Merge validated ``changes`` into an existing journey.

        The changed fields and ``updatedAt`` are written with a single
        ``$set``; fields not in ``changes`` are never rewritten, and a journey
        deleted in the meantime is not recreated.

        Returns:
            The updated journey, or None if the id matches nothing
        """
        object_id = parse_object_id(journey_id)
        if object_id is None:
            logger.debug("Ignoring malformed journey id %r", journey_id)
            return None

        update_fields = {field: _to_document_value(value) for field, value in changes.items()}
        update_fields["updatedAt"] = get_current_utc_time()

        try:
            journey = await self.model.find_one({"_id": object_id}).update(
                {"$set": update_fields},
                response_type=UpdateResponse.NEW_DOCUMENT,
            )
        except PyMongoError as e:
            raise DatabaseException(f"Failed to update journey: {e}") from e

        if journey is None:
            return None
        logger.info("Updated journey %s fields: %s", journey_id, sorted(changes))
        return journey

    async def delete_by_id(self, journey_id: str) -> bool:
        """Delete a journey, returning False if the id matches nothing."""
        object_id = parse_object_id(journey_id)
        if object_id is None:
            return False

        try:
            result = await self.model.find_one({"_id": object_id}).delete()
        except PyMongoError as e:
            raise DatabaseException(f"Failed to delete journey: {e}") from e
        deleted = bool(result and result.deleted_count)
        if deleted:
            logger.info("Deleted journey %s", journey_id)
        return deleted

    async def aggregate(self, pipeline: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Run an aggregation pipeline over the whole collection."""
        return await aggregate_to_list(self.model, pipeline)

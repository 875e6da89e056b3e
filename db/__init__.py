"""Database package for MongoDB operations using Beanie ODM.

Modules:
    manager: DatabaseManager owning the MongoDB client and Beanie binding
    models: Beanie Document and embedded models for the journeys collection
    schemas: Request schemas and pure validation
    query: Filter, sort and limit building from request parameters
    aggregation: Aggregation pipelines and helpers
    store: JourneyStore, the persistence interface used by the services

Usage:
    from db import JourneyStore

    store = JourneyStore()
    journey = await store.find_by_id(journey_id)
"""

from db.aggregation import aggregate_to_list
from db.manager import DatabaseManager
from db.models import ALL_DOCUMENT_MODELS, Journey, JourneySummary
from db.query import build_journey_filter, build_similar_filter, parse_query_date
from db.schemas import (
    JourneyCreate,
    JourneyUpdate,
    collect_validation_errors,
    validate_journey_create,
    validate_journey_update,
)
from db.store import JourneyStore

__all__ = [
    "ALL_DOCUMENT_MODELS",
    "DatabaseManager",
    "Journey",
    "JourneyCreate",
    "JourneyStore",
    "JourneySummary",
    "JourneyUpdate",
    "aggregate_to_list",
    "build_journey_filter",
    "build_similar_filter",
    "collect_validation_errors",
    "parse_query_date",
    "validate_journey_create",
    "validate_journey_update",
]

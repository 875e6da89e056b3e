"""
Journey recording and querying package.

This package provides modular functionality for:
- Journey listing and filtering
- Journey CRUD operations
- Journey statistics and similar-journey lookup

The package is organized into:
- routes/: API endpoint handlers organized by domain
- services/: Business logic on top of ``db.store.JourneyStore``
- serializers.py: Data transformation utilities
"""

from fastapi import APIRouter

from journeys.routes import crud, query, stats

# Create main router that aggregates all journey-related routes
router = APIRouter()

# Stats first so /stats/summary is never read as a journey id
router.include_router(stats.router, tags=["journeys-stats"])
router.include_router(query.router, tags=["journeys-query"])
router.include_router(crud.router, tags=["journeys-crud"])

__all__ = ["router"]

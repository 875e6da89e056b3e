"""Journey API routes."""

from journeys.routes import crud, query, stats

__all__ = ["crud", "query", "stats"]

"""FastAPI dependencies shared by the journey routes."""

from fastapi import Request

from db.store import JourneyStore


def get_journey_store(request: Request) -> JourneyStore:
    """Return the store created by the application lifespan."""
    store = getattr(request.app.state, "journey_store", None)
    if store is None:
        msg = "Journey store is not initialized"
        raise RuntimeError(msg)
    return store

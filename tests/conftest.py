import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import httpx  # noqa: E402
import pytest  # noqa: E402
from beanie import init_beanie  # noqa: E402
from mongomock_motor import AsyncMongoMockClient  # noqa: E402

from db.models import Journey  # noqa: E402
from db.store import JourneyStore  # noqa: E402


def make_journey_payload(**overrides):
    """A complete, valid create body; override any field per test."""
    payload = {
        "title": "Morning commute",
        "startTime": "2024-03-01T08:00:00Z",
        "endTime": "2024-03-01T08:30:00Z",
        "totalDuration": 1800,
        "averageSpeed": 32.5,
        "maxSpeed": 61.0,
        "currentSpeed": 0,
        "totalDistance": 10.0,
        "distanceUnit": "km",
        "detectedVehicle": "car",
        "coordinates": [
            {"lat": 52.52, "lng": 13.405, "timestamp": 1709280000000, "speed": 0, "accuracy": 5},
            {"lat": 52.53, "lng": 13.41, "timestamp": 1709280060000, "speed": 30, "accuracy": 4},
        ],
        "speedHistory": [
            {"speed": 30, "timestamp": 1709280060000, "location": {"lat": 52.53, "lng": 13.41}},
        ],
        "speedDrops": [
            {
                "timestamp": 1709280120000,
                "fromSpeed": 50,
                "toSpeed": 10,
                "location": {"lat": 52.54, "lng": 13.42},
            },
        ],
        "speedAlerts": [],
        "userId": "rider-1",
        "tags": ["work"],
        "notes": "Light traffic",
        "status": "completed",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def journey_payload():
    return make_journey_payload()


@pytest.fixture
async def beanie_db():
    client = AsyncMongoMockClient()
    database = client["test_db"]
    await init_beanie(database=database, document_models=[Journey])
    return database


@pytest.fixture
def journey_store(beanie_db) -> JourneyStore:
    return JourneyStore()


@pytest.fixture
async def api_client(journey_store):
    from app import create_app
    from journeys.dependencies import get_journey_store

    app = create_app()
    app.dependency_overrides[get_journey_store] = lambda: journey_store
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def journey_factory():
    return make_journey_payload

from datetime import UTC, datetime

from beanie import PydanticObjectId

from db.models import Journey, JourneySummary
from journeys.serializers import serialize_journey


def _journey(**overrides) -> Journey:
    values = {
        "startTime": "2024-03-01T08:00:00Z",
        "endTime": "2024-03-01T08:30:00Z",
        "totalDuration": 1800,
        "averageSpeed": 20,
        "maxSpeed": 40,
        "totalDistance": 10,
    }
    values.update(overrides)
    return Journey.model_validate(values)


async def test_journey_defaults(beanie_db) -> None:
    journey = _journey()

    assert journey.title == "Untitled Journey"
    assert journey.detectedVehicle == "car"
    assert journey.distanceUnit == "km"
    assert journey.status == "completed"
    assert journey.userId == "guest"
    assert journey.currentSpeed == 0
    assert journey.coordinates == []
    assert journey.notes is None


async def test_journey_reads_epoch_millisecond_start_time(beanie_db) -> None:
    journey = _journey(startTime=1709280000000)

    assert journey.startTime == datetime(2024, 3, 1, 8, 0, tzinfo=UTC)
    assert serialize_journey(journey)["journeyDate"].startswith("2024-03-01T08:00:00")


async def test_journey_naive_timestamps_read_as_utc(beanie_db) -> None:
    journey = _journey(createdAt=datetime(2024, 3, 1, 9, 0))
    assert journey.createdAt == datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


async def test_journey_tags_are_unique(beanie_db) -> None:
    journey = _journey(tags=["work", "rain", "work"])
    assert journey.tags == ["work", "rain"]


async def test_serialize_journey_exposes_id_twice_and_journey_date(beanie_db) -> None:
    journey = _journey(id=PydanticObjectId("65e1a0000000000000000001"))

    data = serialize_journey(journey)

    assert data["_id"] == "65e1a0000000000000000001"
    assert data["id"] == data["_id"]
    assert data["journeyDate"] == data["startTime"]
    assert data["startTime"].startswith("2024-03-01T08:00:00")
    assert "revision_id" not in data
    assert "coordinates" in data


def test_serialize_summary_has_no_heavy_arrays() -> None:
    summary = JourneySummary.model_validate(
        {
            "_id": PydanticObjectId("65e1a0000000000000000002"),
            "startTime": datetime(2024, 3, 1, 8, 0),
            "totalDistance": 3.5,
        },
    )

    data = serialize_journey(summary)

    assert data["_id"] == "65e1a0000000000000000002"
    assert data["journeyDate"] == data["startTime"]
    assert "coordinates" not in data
    assert "speedHistory" not in data

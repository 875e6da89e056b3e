import asyncio
from datetime import UTC, datetime

import pytest
from bson import ObjectId
from pymongo import ASCENDING

from db.aggregation import overall_stats_pipeline, vehicle_breakdown_pipeline
from db.models import Journey, JourneySummary
from db.schemas import validate_journey_create, validate_journey_update


async def _insert(store, journey_factory, **overrides) -> Journey:
    return await store.insert(validate_journey_create(journey_factory(**overrides)))


@pytest.mark.asyncio
async def test_insert_assigns_id_and_timestamps(journey_store, journey_factory) -> None:
    journey = await _insert(journey_store, journey_factory)

    assert journey.id is not None
    assert journey.createdAt is not None
    assert journey.updatedAt == journey.createdAt

    found = await journey_store.find_by_id(str(journey.id))
    assert found is not None
    assert found.title == "Morning commute"
    assert found.startTime == datetime(2024, 3, 1, 8, tzinfo=UTC)
    assert len(found.coordinates) == 2
    assert found.speedHistory[0].location.lat == pytest.approx(52.53)


@pytest.mark.asyncio
async def test_find_by_id_handles_unknown_and_malformed_ids(journey_store) -> None:
    assert await journey_store.find_by_id(str(ObjectId())) is None
    assert await journey_store.find_by_id("definitely-not-an-id") is None


@pytest.mark.asyncio
async def test_find_many_projects_out_heavy_arrays(journey_store, journey_factory) -> None:
    await _insert(journey_store, journey_factory)

    results = await journey_store.find_many({})

    assert len(results) == 1
    assert isinstance(results[0], JourneySummary)
    dumped = results[0].model_dump()
    assert "coordinates" not in dumped
    assert "speedHistory" not in dumped
    assert len(results[0].speedDrops) == 1


@pytest.mark.asyncio
async def test_find_many_sorts_filters_and_limits(journey_store, journey_factory) -> None:
    for distance in (5.0, 15.0, 25.0):
        await _insert(journey_store, journey_factory, totalDistance=distance)

    results = await journey_store.find_many(
        {"totalDistance": {"$gte": 10}},
        sort=[("totalDistance", ASCENDING)],
        limit=1,
    )

    assert [r.totalDistance for r in results] == [15.0]
    assert await Journey.find_all().count() == 3


@pytest.mark.asyncio
async def test_update_merges_only_given_fields(journey_store, journey_factory) -> None:
    journey = await _insert(journey_store, journey_factory)

    updated = await journey_store.update_by_id(
        str(journey.id),
        validate_journey_update({"totalDistance": 42.0, "status": "paused"}),
    )

    assert updated is not None
    assert updated.totalDistance == 42.0
    assert updated.status == "paused"

    reloaded = await journey_store.find_by_id(str(journey.id))
    assert reloaded.totalDistance == 42.0
    assert reloaded.title == "Morning commute"
    assert len(reloaded.coordinates) == 2
    assert reloaded.updatedAt >= reloaded.createdAt


@pytest.mark.asyncio
async def test_update_missing_journey_returns_none(journey_store) -> None:
    assert await journey_store.update_by_id(str(ObjectId()), {"title": "x"}) is None


@pytest.mark.asyncio
async def test_delete_by_id(journey_store, journey_factory) -> None:
    journey = await _insert(journey_store, journey_factory)

    assert await journey_store.delete_by_id(str(journey.id)) is True
    assert await journey_store.find_by_id(str(journey.id)) is None
    assert await journey_store.delete_by_id(str(journey.id)) is False


@pytest.mark.asyncio
async def test_aggregate_runs_pipelines(journey_store, journey_factory) -> None:
    empty = await journey_store.aggregate(overall_stats_pipeline())
    assert not any(row.get("totalJourneys") for row in empty)

    await _insert(journey_store, journey_factory, totalDistance=10, averageSpeed=20, maxSpeed=50)
    await _insert(journey_store, journey_factory, totalDistance=30, averageSpeed=40, maxSpeed=90)
    await _insert(journey_store, journey_factory, detectedVehicle="bus", totalDistance=5)

    overall = await journey_store.aggregate(overall_stats_pipeline())
    by_vehicle = await journey_store.aggregate(vehicle_breakdown_pipeline())

    assert len(overall) == 1
    assert overall[0]["totalJourneys"] == 3
    assert overall[0]["totalDistance"] == pytest.approx(45)
    assert overall[0]["maxSpeedEver"] == pytest.approx(90)
    assert overall[0]["_id"] is None
    assert sorted((row["_id"], row["count"]) for row in by_vehicle) == [
        ("bus", 1),
        ("car", 2),
    ]


@pytest.mark.asyncio
async def test_update_after_delete_does_not_recreate(journey_store, journey_factory) -> None:
    journey = await _insert(journey_store, journey_factory)
    await Journey.find_one({"_id": journey.id}).delete()

    updated = await journey_store.update_by_id(
        str(journey.id),
        validate_journey_update({"title": "Evening commute"}),
    )

    assert updated is None
    assert await journey_store.find_by_id(str(journey.id)) is None
    assert await Journey.find_all().count() == 0


@pytest.mark.asyncio
async def test_update_keeps_fields_written_by_other_clients(journey_store, journey_factory) -> None:
    journey = await _insert(journey_store, journey_factory)
    await Journey.find_one({"_id": journey.id}).update({"$set": {"notes": "Road works"}})

    updated = await journey_store.update_by_id(
        str(journey.id),
        validate_journey_update({"title": "Evening commute"}),
    )

    assert updated.title == "Evening commute"
    assert updated.notes == "Road works"
    reloaded = await journey_store.find_by_id(str(journey.id))
    assert reloaded.notes == "Road works"


@pytest.mark.asyncio
async def test_concurrent_updates_on_different_fields_both_apply(
    journey_store,
    journey_factory,
) -> None:
    journey = await _insert(journey_store, journey_factory)

    await asyncio.gather(
        journey_store.update_by_id(str(journey.id), validate_journey_update({"title": "A"})),
        journey_store.update_by_id(str(journey.id), validate_journey_update({"notes": "B"})),
    )

    reloaded = await journey_store.find_by_id(str(journey.id))
    assert reloaded.title == "A"
    assert reloaded.notes == "B"


@pytest.mark.asyncio
async def test_update_replaces_embedded_arrays(journey_store, journey_factory) -> None:
    journey = await _insert(journey_store, journey_factory)

    updated = await journey_store.update_by_id(
        str(journey.id),
        validate_journey_update(
            {"speedAlerts": [{"timestamp": 1709280300000, "speed": 72, "limit": 50}]},
        ),
    )

    assert [alert.limit for alert in updated.speedAlerts] == [50]
    reloaded = await journey_store.find_by_id(str(journey.id))
    assert reloaded.speedAlerts[0].speed == 72
    assert len(reloaded.coordinates) == 2


@pytest.mark.asyncio
async def test_update_malformed_id_returns_none(journey_store) -> None:
    assert await journey_store.update_by_id("not-an-id", {"title": "x"}) is None
    assert await journey_store.delete_by_id("not-an-id") is False

"""
Unit tests for trip creation, detail assembly and trip-level changes
"""
import pytest
from sqlalchemy import select, func, update

from trip_planner.core.exceptions import FieldValidationError, NotFoundError
from trip_planner.models import Trip, Day, Flight, Hotel
from trip_planner.services.meta_service import MetaService
from trip_planner.services.resource_service import ResourceService
from trip_planner.services.trip_service import TripService

KYOTO = {
    "title": "Kyoto",
    "destination": "Kyoto",
    "startDate": "2026-04-10",
    "endDate": "2026-04-12",
    "currency": "JPY",
}

OUTBOUND = {
    "legType": "outbound",
    "fromCode": "ICN", "toCode": "KIX",
    "departAt": "2026-04-10T09:00:00+09:00", "arriveAt": "2026-04-10T10:45:00+09:00",
    "airline": "Korean Air", "flightNo": "KE723",
}

INBOUND = dict(
    OUTBOUND, legType="inbound", fromCode="KIX", toCode="ICN", flightNo="KE724",
    departAt="2026-04-12T12:00:00+09:00", arriveAt="2026-04-12T14:00:00+09:00",
)


async def count_rows(db_session, model):
    result = await db_session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


async def test_create_trip_generates_one_day_per_date(db_session):
    created = await TripService(db_session).create_trip(KYOTO)

    assert created.trip.id.startswith("trip_")
    assert created.trip.status == "draft"
    assert [(d.day_no, d.date) for d in created.days] == [
        (1, "2026-04-10"),
        (2, "2026-04-11"),
        (3, "2026-04-12"),
    ]
    assert all(d.created_at == created.trip.created_at for d in created.days)
    assert created.flights == []
    assert created.hotels == []


async def test_create_trip_with_nested_flights_and_hotels(db_session):
    body = dict(KYOTO, flights=[OUTBOUND, INBOUND], hotels=[{
        "name": "Hotel Granvia", "city": "Kyoto",
        "checkInDate": "2026-04-10", "checkOutDate": "2026-04-12",
    }])

    created = await TripService(db_session).create_trip(body)

    assert [(f.flight_no, f.leg_order, f.leg_type) for f in created.flights] == [
        ("KE723", 1, "outbound"),
        ("KE724", 2, "inbound"),
    ]
    assert created.flights[0].depart_at == "2026-04-10T00:00:00.000Z"
    assert created.hotels[0].currency == "JPY"


async def test_nested_validation_failure_writes_nothing(db_session):
    bad_inbound = dict(INBOUND)
    del bad_inbound["airline"]
    body = dict(KYOTO, flights=[OUTBOUND, bad_inbound])

    with pytest.raises(FieldValidationError) as exc:
        await TripService(db_session).create_trip(body)

    assert exc.value.message == "flights[1]: airline is required"
    for model in (Trip, Day, Flight, Hotel):
        assert await count_rows(db_session, model) == 0


async def test_nested_collections_must_be_arrays(db_session):
    with pytest.raises(FieldValidationError) as exc:
        await TripService(db_session).create_trip(dict(KYOTO, hotels={"name": "x"}))
    assert exc.value.message == "hotels must be an array"


@pytest.mark.parametrize("start,end,message", [
    ("2026-04-12", "2026-04-10", "startDate must be before or equal to endDate"),
    ("2026-01-01", "2026-05-01", "Trip length is limited to 120 days"),
])
async def test_invalid_ranges_persist_nothing(db_session, start, end, message):
    with pytest.raises(FieldValidationError) as exc:
        await TripService(db_session).create_trip(dict(KYOTO, startDate=start, endDate=end))
    assert exc.value.message == message
    assert await count_rows(db_session, Trip) == 0
    assert await count_rows(db_session, Day) == 0


async def test_trip_detail_collects_every_collection(db_session):
    service = TripService(db_session)
    created = await service.create_trip(dict(KYOTO, flights=[OUTBOUND]))
    resources = ResourceService(db_session)
    await resources.create_item(created.trip.id, "plans", {"dayId": created.days[0].id, "place": "Fushimi Inari"})
    await resources.create_item(created.trip.id, "expenses", {"item": "Ramen", "amount": 1200, "dayId": created.days[0].id})

    detail = await service.get_trip_detail(created.trip.id)

    assert detail.trip.title == "Kyoto"
    assert len(detail.days) == 3
    assert [p.place for p in detail.plans] == ["Fushimi Inari"]
    assert [e.item for e in detail.expenses] == ["Ramen"]
    assert [f.flight_no for f in detail.flights] == ["KE723"]
    assert detail.hotels == []


async def test_trip_detail_missing_trip(db_session):
    with pytest.raises(NotFoundError) as exc:
        await TripService(db_session).get_trip_detail("trip_missing")
    assert exc.value.message == "Trip not found"


async def test_update_trip_rejects_unknown_status_without_change(db_session):
    service = TripService(db_session)
    created = await service.create_trip(KYOTO)

    with pytest.raises(FieldValidationError):
        await service.update_trip(created.trip.id, {"status": "shipped"})

    trip = await service.get_trip(created.trip.id)
    assert trip.status == "draft"

    updated = await service.update_trip(created.trip.id, {"status": "active", "memo": "Cherry blossoms"})
    assert updated.status == "active"
    assert updated.memo == "Cherry blossoms"


async def test_update_missing_trip_checks_existence_first(db_session):
    with pytest.raises(NotFoundError):
        await TripService(db_session).update_trip("trip_missing", {})


async def test_list_trips_most_recently_updated_first(db_session):
    service = TripService(db_session)
    first = await service.create_trip(KYOTO)
    second = await service.create_trip(dict(KYOTO, title="Osaka"))
    await db_session.execute(
        update(Trip).where(Trip.id == first.trip.id).values(updated_at="2030-01-01T00:00:00.000Z")
    )
    await db_session.commit()

    trips = await service.list_trips()
    assert [t.id for t in trips] == [first.trip.id, second.trip.id]


async def test_delete_trip_cascades(db_session):
    service = TripService(db_session)
    created = await service.create_trip(dict(KYOTO, flights=[OUTBOUND]))
    await ResourceService(db_session).create_item(created.trip.id, "plans", {"dayId": created.days[0].id, "place": "Gion"})

    assert await service.delete_trip(created.trip.id) == created.trip.id

    for model in (Trip, Day, Flight):
        assert await count_rows(db_session, model) == 0
    with pytest.raises(NotFoundError):
        await service.delete_trip(created.trip.id)


async def test_meta_upsert_replaces_value(db_session):
    service = MetaService(db_session)
    with pytest.raises(NotFoundError) as exc:
        await service.get_meta("ui")
    assert exc.value.message == "Meta key not found"

    first = await service.put_meta("ui", {"value": {"theme": "dark"}})
    assert first.value == {"theme": "dark"}

    second = await service.put_meta("ui", {"value": [1, 2, 3]})
    assert second.value == [1, 2, 3]
    assert (await service.get_meta("ui")).value == [1, 2, 3]

    with pytest.raises(FieldValidationError) as exc:
        await service.put_meta("ui", {"val": 1})
    assert exc.value.message == "value is required"

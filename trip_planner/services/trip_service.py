"""
Trip Service - Manages the trip aggregate: creation with generated days,
detail assembly and trip-level patch/delete
"""
import asyncio
import logging
from typing import Any, Dict, List, Sequence

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from trip_planner.core.exceptions import FieldValidationError, NotFoundError
from trip_planner.core.identifiers import make_id, now_iso
from trip_planner.core.validation import JsonBody, build_date_range, value_of
from trip_planner.models import Trip, Day, Flight, Hotel
from trip_planner.schemas.fields import (
    FieldSpec,
    TRIP_FIELDS,
    FLIGHT_FIELDS,
    HOTEL_FIELDS,
    build_create_values,
    build_patch_assignments,
)
from trip_planner.schemas.resources import DayRead, PlanRead, ExpenseRead, FlightRead, HotelRead
from trip_planner.schemas.trip import TripRead, TripCreatedResponse, TripDetailResponse
from trip_planner.services.resource_service import RESOURCES, scoped_query

logger = logging.getLogger(__name__)


def _validate_nested(
    body: JsonBody, key: str, specs: Sequence[FieldSpec]
) -> List[Dict[str, Any]]:
    """
    Validate an optional nested array of resource bodies.

    Errors carry the array position, e.g. ``flights[1]: airline is required``.
    """
    raw = value_of(body, (key,))
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise FieldValidationError(f"{key} must be an array", field=key)

    items = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise FieldValidationError(f"{key}[{index}] must be an object", field=key)
        try:
            items.append(build_create_values(specs, entry))
        except FieldValidationError as e:
            raise FieldValidationError(f"{key}[{index}]: {e.message}", field=key)
    return items


class TripService:
    """Manages trip CRUD operations and the trip detail aggregation"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_trips(self) -> List[Trip]:
        """All trips, most recently updated first"""
        result = await self.db.execute(select(Trip).order_by(Trip.updated_at.desc()))
        return list(result.scalars().all())

    async def get_trip(self, trip_id: str) -> Trip:
        stmt = select(Trip).where(Trip.id == trip_id).execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        trip = result.scalar_one_or_none()
        if trip is None:
            raise NotFoundError("Trip not found")
        return trip

    async def create_trip(self, body: JsonBody) -> TripCreatedResponse:
        """
        Create a trip together with one day per calendar date and any nested
        flights and hotels.

        Every field is validated before anything is written; the rows are
        committed as one transaction.

        Args:
            body: Trip fields plus optional ``flights`` and ``hotels`` arrays

        Returns:
            The stored trip with its days, flights and hotels

        Raises:
            FieldValidationError: If any trip or nested field is invalid
        """
        values = build_create_values(TRIP_FIELDS, body)
        dates = build_date_range(values["start_date"], values["end_date"])
        flights = _validate_nested(body, "flights", FLIGHT_FIELDS)
        hotels = _validate_nested(body, "hotels", HOTEL_FIELDS)

        created_at = now_iso()
        trip_id = make_id("trip")
        stamps = {"trip_id": trip_id, "created_at": created_at, "updated_at": created_at}

        self.db.add(Trip(id=trip_id, created_at=created_at, updated_at=created_at, **values))
        self.db.add_all(
            Day(id=make_id("day"), day_no=position, date=day, **stamps)
            for position, day in enumerate(dates, start=1)
        )
        for position, flight in enumerate(flights, start=1):
            if flight["leg_order"] is None:
                flight["leg_order"] = position
            self.db.add(Flight(id=make_id("flt"), **stamps, **flight))
        self.db.add_all(Hotel(id=make_id("hotel"), **stamps, **hotel) for hotel in hotels)

        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            f"Created trip {trip_id} with {len(dates)} days",
            extra={"trip_id": trip_id, "flights": len(flights), "hotels": len(hotels)},
        )

        trip = await self.get_trip(trip_id)
        days = await self._read_collection(self.db, "days", trip_id)
        created_flights = await self._read_collection(self.db, "flights", trip_id)
        created_hotels = await self._read_collection(self.db, "hotels", trip_id)
        return TripCreatedResponse(
            trip=TripRead.model_validate(trip),
            days=[DayRead.model_validate(row) for row in days],
            flights=[FlightRead.model_validate(row) for row in created_flights],
            hotels=[HotelRead.model_validate(row) for row in created_hotels],
        )

    @staticmethod
    async def _read_collection(session: AsyncSession, name: str, trip_id: str) -> list:
        result = await session.execute(scoped_query(RESOURCES[name], trip_id))
        return list(result.scalars().all())

    async def _read_collection_isolated(self, name: str, trip_id: str) -> list:
        # One session per concurrent read; a session cannot run statements in parallel
        async with AsyncSession(self.db.bind, expire_on_commit=False) as session:
            return await self._read_collection(session, name, trip_id)

    async def get_trip_detail(self, trip_id: str) -> TripDetailResponse:
        """
        Trip plus its five owned collections, read concurrently.

        Raises:
            NotFoundError: If the trip does not exist
        """
        trip = await self.get_trip(trip_id)
        days, plans, expenses, flights, hotels = await asyncio.gather(
            self._read_collection_isolated("days", trip_id),
            self._read_collection_isolated("plans", trip_id),
            self._read_collection_isolated("expenses", trip_id),
            self._read_collection_isolated("flights", trip_id),
            self._read_collection_isolated("hotels", trip_id),
        )
        return TripDetailResponse(
            trip=TripRead.model_validate(trip),
            days=[DayRead.model_validate(row) for row in days],
            plans=[PlanRead.model_validate(row) for row in plans],
            expenses=[ExpenseRead.model_validate(row) for row in expenses],
            flights=[FlightRead.model_validate(row) for row in flights],
            hotels=[HotelRead.model_validate(row) for row in hotels],
        )

    async def update_trip(self, trip_id: str, body: JsonBody) -> Trip:
        """
        Patch the trip fields present in ``body``.

        The merged date range must still be ordered and at most 120 days long.
        Day rows are left as they are when the date range changes.

        Raises:
            NotFoundError: If the trip does not exist
            FieldValidationError: If no known field is present or a value is malformed
        """
        trip = await self.get_trip(trip_id)
        assignments = build_patch_assignments(TRIP_FIELDS, body)
        if "start_date" in assignments or "end_date" in assignments:
            build_date_range(
                assignments.get("start_date", trip.start_date),
                assignments.get("end_date", trip.end_date),
            )
        assignments["updated_at"] = now_iso()

        await self.db.execute(
            update(Trip)
            .where(Trip.id == trip_id)
            .values(**assignments)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        return await self.get_trip(trip_id)

    async def delete_trip(self, trip_id: str) -> str:
        """Delete a trip; owned rows go with it through ON DELETE CASCADE."""
        result = await self.db.execute(
            delete(Trip)
            .where(Trip.id == trip_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await self.db.rollback()
            raise NotFoundError("Trip not found")
        await self.db.commit()

        logger.info(f"Deleted trip {trip_id}")
        return trip_id

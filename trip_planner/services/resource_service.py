"""
Resource Service - list/create/patch/delete for the trip-owned collections
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel
from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from trip_planner.core.db import Base
from trip_planner.core.exceptions import FieldValidationError, NotFoundError
from trip_planner.core.identifiers import make_id, now_iso
from trip_planner.core.validation import JsonBody
from trip_planner.models import Day, Plan, Expense, Flight, Hotel, Trip
from trip_planner.schemas.fields import (
    FieldSpec,
    DAY_FIELDS,
    PLAN_FIELDS,
    EXPENSE_FIELDS,
    FLIGHT_FIELDS,
    HOTEL_FIELDS,
    build_create_values,
    build_patch_assignments,
)
from trip_planner.schemas.resources import DayRead, PlanRead, ExpenseRead, FlightRead, HotelRead

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceDefinition:
    """How one collection kind maps onto its table"""
    name: str
    model: Type[Base]
    read_schema: Type[BaseModel]
    fields: Tuple[FieldSpec, ...]
    id_prefix: str
    ordering: tuple

    @property
    def not_found_message(self) -> str:
        return f"{self.name} item not found"


RESOURCES: Dict[str, ResourceDefinition] = {
    "days": ResourceDefinition(
        "days", Day, DayRead, DAY_FIELDS, "day",
        (Day.day_no.asc(), Day.date.asc()),
    ),
    "plans": ResourceDefinition(
        "plans", Plan, PlanRead, PLAN_FIELDS, "plan",
        (Plan.sort_order.asc(), Plan.start_min.asc(), Plan.id.asc()),
    ),
    "expenses": ResourceDefinition(
        "expenses", Expense, ExpenseRead, EXPENSE_FIELDS, "exp",
        (Expense.spent_at.desc(), Expense.id.desc()),
    ),
    "flights": ResourceDefinition(
        "flights", Flight, FlightRead, FLIGHT_FIELDS, "flt",
        (Flight.leg_order.asc(), Flight.depart_at.asc(), Flight.id.asc()),
    ),
    "hotels": ResourceDefinition(
        "hotels", Hotel, HotelRead, HOTEL_FIELDS, "hotel",
        (Hotel.check_in_date.asc(), Hotel.id.asc()),
    ),
}


def get_resource(name: str) -> ResourceDefinition:
    try:
        return RESOURCES[name]
    except KeyError:
        raise NotFoundError("Not found")


def scoped_query(resource: ResourceDefinition, trip_id: str):
    """Select every row of ``resource`` owned by ``trip_id`` in canonical order."""
    model = resource.model
    return select(model).where(model.trip_id == trip_id).order_by(*resource.ordering)


class ResourceService:
    """Per-resource CRUD scoped to a trip"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def ensure_trip_exists(self, trip_id: str) -> None:
        result = await self.db.execute(select(Trip.id).where(Trip.id == trip_id))
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Trip not found")

    async def ensure_day_belongs_to_trip(self, day_id: str, trip_id: str) -> None:
        """
        Raises:
            FieldValidationError: If the day is missing or owned by another trip
        """
        stmt = select(Day.id).where(Day.id == day_id, Day.trip_id == trip_id)
        result = await self.db.execute(stmt)
        if result.scalar_one_or_none() is None:
            raise FieldValidationError("dayId does not belong to trip", field="dayId")

    async def next_day_no(self, trip_id: str) -> int:
        # Read-then-insert; a concurrent append surfaces as a 409 from uq_days_trip_day_no
        stmt = select(func.coalesce(func.max(Day.day_no), 0) + 1).where(Day.trip_id == trip_id)
        result = await self.db.execute(stmt)
        return int(result.scalar_one())

    async def next_leg_order(self, trip_id: str) -> int:
        stmt = select(func.coalesce(func.max(Flight.leg_order), 0) + 1).where(Flight.trip_id == trip_id)
        result = await self.db.execute(stmt)
        return int(result.scalar_one())

    async def fetch_by_id(self, resource: ResourceDefinition, item_id: str):
        model = resource.model
        stmt = (
            select(model)
            .where(model.id == item_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        item = result.scalar_one_or_none()
        if item is None:
            raise NotFoundError(resource.not_found_message)
        return item

    async def list_items(self, trip_id: str, name: str) -> List[Any]:
        """
        List every item of a collection for one trip.

        Raises:
            NotFoundError: If the trip does not exist
        """
        resource = get_resource(name)
        await self.ensure_trip_exists(trip_id)
        result = await self.db.execute(scoped_query(resource, trip_id))
        return list(result.scalars().all())

    async def create_item(self, trip_id: str, name: str, body: JsonBody):
        """
        Validate and insert one item under ``trip_id``.

        Args:
            trip_id: Owning trip
            name: Collection name (days, plans, expenses, flights, hotels)
            body: Request body

        Returns:
            The stored row, re-read after commit
        """
        resource = get_resource(name)
        await self.ensure_trip_exists(trip_id)

        values = build_create_values(resource.fields, body)
        created_at = now_iso()
        await self._apply_create_defaults(resource, trip_id, values, created_at)

        item_id = make_id(resource.id_prefix)
        self.db.add(resource.model(
            id=item_id,
            trip_id=trip_id,
            created_at=created_at,
            updated_at=created_at,
            **values,
        ))
        await self.db.commit()

        logger.info(f"Created {resource.name} item {item_id}", extra={"trip_id": trip_id})
        return await self.fetch_by_id(resource, item_id)

    async def _apply_create_defaults(
        self,
        resource: ResourceDefinition,
        trip_id: str,
        values: Dict[str, Any],
        created_at: str,
    ) -> None:
        if resource.name == "days" and values["day_no"] is None:
            values["day_no"] = await self.next_day_no(trip_id)
        elif resource.name == "plans":
            await self.ensure_day_belongs_to_trip(values["day_id"], trip_id)
        elif resource.name == "expenses":
            if values["day_id"]:
                await self.ensure_day_belongs_to_trip(values["day_id"], trip_id)
            if values["spent_at"] is None:
                values["spent_at"] = created_at
        elif resource.name == "flights" and values["leg_order"] is None:
            values["leg_order"] = await self.next_leg_order(trip_id)

    async def patch_item(self, name: str, item_id: str, body: JsonBody):
        """
        Update only the fields present in ``body``.

        Raises:
            FieldValidationError: If no known field is present or a value is malformed
            NotFoundError: If no row has ``item_id``
        """
        resource = get_resource(name)
        model = resource.model
        assignments = build_patch_assignments(resource.fields, body)

        day_id: Optional[str] = assignments.get("day_id")
        if day_id:
            trip_id = await self._owning_trip(resource, item_id)
            await self.ensure_day_belongs_to_trip(day_id, trip_id)

        assignments["updated_at"] = now_iso()
        stmt = (
            update(model)
            .where(model.id == item_id)
            .values(**assignments)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        if result.rowcount == 0:
            await self.db.rollback()
            raise NotFoundError(resource.not_found_message)
        await self.db.commit()

        return await self.fetch_by_id(resource, item_id)

    async def _owning_trip(self, resource: ResourceDefinition, item_id: str) -> str:
        model = resource.model
        result = await self.db.execute(select(model.trip_id).where(model.id == item_id))
        trip_id = result.scalar_one_or_none()
        if trip_id is None:
            raise NotFoundError(resource.not_found_message)
        return trip_id

    async def delete_item(self, name: str, item_id: str) -> str:
        resource = get_resource(name)
        model = resource.model
        result = await self.db.execute(
            delete(model)
            .where(model.id == item_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await self.db.rollback()
            raise NotFoundError(resource.not_found_message)
        await self.db.commit()

        logger.info(f"Deleted {resource.name} item {item_id}")
        return item_id

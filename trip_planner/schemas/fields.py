"""
Field tables for every writable resource.

Each ``FieldSpec`` names the column, the accepted body spellings (the first
one doubles as the error label) and how the value is coerced on create and
on patch.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple

from trip_planner.core.exceptions import FieldValidationError
from trip_planner.core.validation import (
    JsonBody,
    as_choice,
    as_date_only,
    as_iso_datetime,
    as_optional_integer,
    as_optional_string,
    as_required_integer,
    as_required_string,
    has_any_key,
    value_of,
)
from trip_planner.models.flight import LegType
from trip_planner.models.trip import TripStatus

DEFAULT_CURRENCY = "JPY"
DEFAULT_FLIGHT_CURRENCY = "KRW"


class FieldKind(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    DATE = "date"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class FieldSpec:
    column: str
    aliases: Tuple[str, ...]
    kind: FieldKind = FieldKind.STRING
    required: bool = False
    # On patch a present field may only be cleared when nullable
    nullable: Optional[bool] = None
    default: Any = None
    choices: Optional[Tuple[str, ...]] = None

    @property
    def label(self) -> str:
        return self.aliases[0]

    @property
    def allows_null(self) -> bool:
        if self.nullable is None:
            return not self.required
        return self.nullable

    def coerce(self, raw: Any, required: bool) -> Any:
        label = self.label

        if self.kind is FieldKind.INTEGER:
            if required:
                return as_required_integer(raw, label)
            return as_optional_integer(raw, label)

        text = as_required_string(raw, label) if required else as_optional_string(raw, label)
        if text is None:
            return None
        if self.kind is FieldKind.DATE:
            return as_date_only(text, label)
        if self.kind is FieldKind.TIMESTAMP:
            return as_iso_datetime(text, label)
        if self.choices:
            return as_choice(text, label, self.choices)
        return text


def build_create_values(specs: Sequence[FieldSpec], body: JsonBody) -> Dict[str, Any]:
    """
    Validate a create body against ``specs``.

    Optional fields that normalize to ``None`` fall back to the field default.

    Raises:
        FieldValidationError: On the first missing or malformed field
    """
    values: Dict[str, Any] = {}
    for spec in specs:
        value = spec.coerce(value_of(body, spec.aliases), spec.required)
        if value is None and spec.default is not None:
            value = spec.default
        values[spec.column] = value
    return values


def build_patch_assignments(specs: Sequence[FieldSpec], body: JsonBody) -> Dict[str, Any]:
    """
    Column assignments for the fields present in ``body``.

    Raises:
        FieldValidationError: If a present field is malformed or no known field is present
    """
    assignments: Dict[str, Any] = {}
    for spec in specs:
        if not has_any_key(body, spec.aliases):
            continue
        assignments[spec.column] = spec.coerce(
            value_of(body, spec.aliases), not spec.allows_null
        )

    if not assignments:
        raise FieldValidationError("No fields to update")
    return assignments


TRIP_FIELDS = (
    FieldSpec("title", ("title",), required=True),
    FieldSpec("destination", ("destination",), required=True),
    FieldSpec("start_date", ("startDate", "start_date"), FieldKind.DATE, required=True),
    FieldSpec("end_date", ("endDate", "end_date"), FieldKind.DATE, required=True),
    FieldSpec("currency", ("currency",), nullable=False, default=DEFAULT_CURRENCY),
    FieldSpec("memo", ("memo",)),
    FieldSpec(
        "status", ("status",), nullable=False, default=TripStatus.DRAFT.value,
        choices=tuple(status.value for status in TripStatus),
    ),
)

DAY_FIELDS = (
    FieldSpec("date", ("date",), FieldKind.DATE, required=True),
    FieldSpec("day_no", ("dayNo", "day_no"), FieldKind.INTEGER, nullable=False),
    FieldSpec("title", ("title",)),
    FieldSpec("note", ("note",)),
)

PLAN_FIELDS = (
    FieldSpec("day_id", ("dayId", "day_id"), required=True),
    FieldSpec("start_min", ("startMin", "start_min"), FieldKind.INTEGER),
    FieldSpec("end_min", ("endMin", "end_min"), FieldKind.INTEGER),
    FieldSpec("place", ("place",), required=True),
    FieldSpec("detail", ("detail",)),
    FieldSpec("map_url", ("mapUrl", "map_url")),
    FieldSpec("food", ("food",)),
    FieldSpec("transport", ("transport",)),
    FieldSpec("cost_estimate", ("costEstimate", "cost_estimate"), FieldKind.INTEGER),
    FieldSpec("sort_order", ("sortOrder", "sort_order"), FieldKind.INTEGER, nullable=False, default=0),
)

EXPENSE_FIELDS = (
    FieldSpec("day_id", ("dayId", "day_id")),
    FieldSpec("item", ("item",), required=True),
    FieldSpec("amount", ("amount",), FieldKind.INTEGER, required=True),
    FieldSpec("currency", ("currency",), nullable=False, default=DEFAULT_CURRENCY),
    FieldSpec("category", ("category",)),
    FieldSpec("spent_at", ("spentAt", "spent_at"), FieldKind.TIMESTAMP, nullable=False),
    FieldSpec("note", ("note",)),
)

FLIGHT_FIELDS = (
    FieldSpec(
        "leg_type", ("legType", "leg_type"), nullable=False, default=LegType.MULTI.value,
        choices=tuple(leg.value for leg in LegType),
    ),
    FieldSpec("leg_order", ("legOrder", "leg_order"), FieldKind.INTEGER, nullable=False),
    FieldSpec("from_code", ("fromCode", "from_code"), required=True),
    FieldSpec("from_airport", ("fromAirport", "from_airport")),
    FieldSpec("to_code", ("toCode", "to_code"), required=True),
    FieldSpec("to_airport", ("toAirport", "to_airport")),
    FieldSpec("depart_at", ("departAt", "depart_at"), FieldKind.TIMESTAMP, required=True),
    FieldSpec("arrive_at", ("arriveAt", "arrive_at"), FieldKind.TIMESTAMP, required=True),
    FieldSpec("airline", ("airline",), required=True),
    FieldSpec("flight_no", ("flightNo", "flight_no"), required=True),
    FieldSpec("price", ("price",), FieldKind.INTEGER),
    FieldSpec("currency", ("currency",), default=DEFAULT_FLIGHT_CURRENCY),
    FieldSpec("note", ("note",)),
)

HOTEL_FIELDS = (
    FieldSpec("name", ("name",), required=True),
    FieldSpec("city", ("city",), required=True),
    FieldSpec("check_in_date", ("checkInDate", "check_in_date"), FieldKind.DATE, required=True),
    FieldSpec("check_out_date", ("checkOutDate", "check_out_date"), FieldKind.DATE, required=True),
    FieldSpec("confirmation_no", ("confirmationNo", "confirmation_no")),
    FieldSpec("total_price", ("totalPrice", "total_price"), FieldKind.INTEGER),
    FieldSpec("currency", ("currency",), default=DEFAULT_CURRENCY),
    FieldSpec("note", ("note",)),
)

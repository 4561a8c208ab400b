"""
Read schemas for the trip-owned resources and the meta store
"""
from pydantic import BaseModel
from typing import Any, Optional


class DayRead(BaseModel):
    id: str
    trip_id: str
    day_no: int
    date: str
    title: Optional[str]
    note: Optional[str]
    created_at: str
    updated_at: str

    class Config:
        from_attributes = True


class PlanRead(BaseModel):
    id: str
    trip_id: str
    day_id: str
    start_min: Optional[int]
    end_min: Optional[int]
    place: str
    detail: Optional[str]
    map_url: Optional[str]
    food: Optional[str]
    transport: Optional[str]
    cost_estimate: Optional[int]
    sort_order: int
    created_at: str
    updated_at: str

    class Config:
        from_attributes = True


class ExpenseRead(BaseModel):
    id: str
    trip_id: str
    day_id: Optional[str]
    item: str
    amount: int
    currency: str
    category: Optional[str]
    spent_at: str
    note: Optional[str]
    created_at: str
    updated_at: str

    class Config:
        from_attributes = True


class FlightRead(BaseModel):
    id: str
    trip_id: str
    leg_type: str
    leg_order: int
    from_code: str
    from_airport: Optional[str]
    to_code: str
    to_airport: Optional[str]
    depart_at: str
    arrive_at: str
    airline: str
    flight_no: str
    price: Optional[int]
    currency: Optional[str]
    note: Optional[str]
    created_at: str
    updated_at: str

    class Config:
        from_attributes = True


class HotelRead(BaseModel):
    id: str
    trip_id: str
    name: str
    city: str
    check_in_date: str
    check_out_date: str
    confirmation_no: Optional[str]
    total_price: Optional[int]
    currency: Optional[str]
    note: Optional[str]
    created_at: str
    updated_at: str

    class Config:
        from_attributes = True


class MetaRead(BaseModel):
    key: str
    value: Any = None
    updated_at: str

    class Config:
        from_attributes = True


class FlightLookupResult(BaseModel):
    """Provider flight mapped onto the local flight field names"""
    flight_no: str
    airline: Optional[str] = None
    from_code: Optional[str] = None
    from_airport: Optional[str] = None
    to_code: Optional[str] = None
    to_airport: Optional[str] = None
    depart_at: Optional[str] = None
    arrive_at: Optional[str] = None
    flight_date: Optional[str] = None
    flight_status: Optional[str] = None

"""
Trip schemas for API responses
"""
from pydantic import BaseModel
from typing import Optional, List

from trip_planner.schemas.base import Envelope
from trip_planner.schemas.resources import DayRead, PlanRead, ExpenseRead, FlightRead, HotelRead


class TripRead(BaseModel):
    """Schema for trip read response"""
    id: str
    title: str
    destination: str
    start_date: str
    end_date: str
    currency: str
    memo: Optional[str]
    status: str
    created_at: str
    updated_at: str

    class Config:
        from_attributes = True


class TripEnvelope(Envelope):
    trip: TripRead


class TripCreatedResponse(Envelope):
    """Trip plus the rows generated alongside it"""
    trip: TripRead
    days: List[DayRead]
    flights: List[FlightRead]
    hotels: List[HotelRead]


class TripDetailResponse(Envelope):
    """Trip with every owned collection"""
    trip: TripRead
    days: List[DayRead]
    plans: List[PlanRead]
    expenses: List[ExpenseRead]
    flights: List[FlightRead]
    hotels: List[HotelRead]

"""
Flight lookup endpoint - fills a flight form from a flight number
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from trip_planner.core.dependencies import get_flight_lookup_service
from trip_planner.schemas.base import ItemEnvelope
from trip_planner.schemas.resources import FlightLookupResult
from trip_planner.services.flight_lookup import FlightLookupService

router = APIRouter(prefix="/api", tags=["flight-lookup"])


@router.get("/flight-lookup", response_model=ItemEnvelope[FlightLookupResult])
async def flight_lookup(
    flight_iata: Optional[str] = Query(None, alias="flightIata"),
    flight_date: Optional[str] = Query(None, alias="date"),
    service: FlightLookupService = Depends(get_flight_lookup_service),
):
    """
    Look up a scheduled flight

    - **flightIata**: Flight number, e.g. KE123
    - **date**: Optional YYYY-MM-DD departure date
    """
    item = await service.lookup(flight_iata, flight_date)
    return ItemEnvelope[FlightLookupResult](item=item)

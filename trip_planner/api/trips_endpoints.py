"""
Trip API endpoints - Trip lifecycle and the trip detail aggregate
"""
from fastapi import APIRouter, Depends

from trip_planner.core.dependencies import get_trip_service, read_json_body
from trip_planner.core.validation import JsonBody
from trip_planner.schemas.base import ListEnvelope, DeletedEnvelope
from trip_planner.schemas.trip import TripRead, TripEnvelope, TripCreatedResponse, TripDetailResponse
from trip_planner.services.trip_service import TripService

router = APIRouter(prefix="/api/trips", tags=["trips"])


@router.get("", response_model=ListEnvelope[TripRead])
async def list_trips(service: TripService = Depends(get_trip_service)):
    """
    List every trip, most recently updated first
    """
    trips = await service.list_trips()
    return ListEnvelope[TripRead](items=[TripRead.model_validate(t) for t in trips])


@router.post("", response_model=TripCreatedResponse)
async def create_trip(
    body: JsonBody = Depends(read_json_body),
    service: TripService = Depends(get_trip_service),
):
    """
    Create a trip and one day per date in its range

    - **title**, **destination**: Required
    - **startDate**, **endDate**: Inclusive YYYY-MM-DD range, at most 120 days
    - **currency**, **memo**, **status**: Optional
    - **flights**, **hotels**: Optional arrays created with the trip
    """
    return await service.create_trip(body)


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(trip_id: str, service: TripService = Depends(get_trip_service)):
    """
    Trip with its days, plans, expenses, flights and hotels
    """
    return await service.get_trip_detail(trip_id)


@router.patch("/{trip_id}", response_model=TripEnvelope)
async def update_trip(
    trip_id: str,
    body: JsonBody = Depends(read_json_body),
    service: TripService = Depends(get_trip_service),
):
    """
    Update the trip fields present in the body
    """
    trip = await service.update_trip(trip_id, body)
    return TripEnvelope(trip=TripRead.model_validate(trip))


@router.delete("/{trip_id}", response_model=DeletedEnvelope)
async def delete_trip(trip_id: str, service: TripService = Depends(get_trip_service)):
    """
    Delete a trip and everything it owns
    """
    deleted_id = await service.delete_trip(trip_id)
    return DeletedEnvelope(id=deleted_id)

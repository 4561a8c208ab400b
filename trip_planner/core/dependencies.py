"""
Dependency providers for FastAPI routes.
Services are built per request around the request's database session.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
import json
import logging

from trip_planner.config.settings import Settings
from trip_planner.core.db import get_db
from trip_planner.core.exceptions import FieldValidationError
from trip_planner.core.validation import JsonBody
from trip_planner.services.flight_lookup import FlightLookupService
from trip_planner.services.meta_service import MetaService
from trip_planner.services.resource_service import ResourceService
from trip_planner.services.trip_service import TripService

logger = logging.getLogger(__name__)


async def read_json_body(request: Request) -> JsonBody:
    """
    Decode the request body as a JSON object.

    Raises:
        FieldValidationError: If the body is not JSON or not an object
    """
    raw = await request.body()
    try:
        body = json.loads(raw)
    except ValueError:
        raise FieldValidationError("Invalid JSON body")
    if not isinstance(body, dict):
        raise FieldValidationError("JSON object body is required")
    return body


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_trip_service(db: AsyncSession = Depends(get_db)) -> TripService:
    return TripService(db)


def get_resource_service(db: AsyncSession = Depends(get_db)) -> ResourceService:
    return ResourceService(db)


def get_meta_service(db: AsyncSession = Depends(get_db)) -> MetaService:
    return MetaService(db)


def get_flight_lookup_service(settings: Settings = Depends(get_app_settings)) -> FlightLookupService:
    return FlightLookupService(settings.flight_lookup)

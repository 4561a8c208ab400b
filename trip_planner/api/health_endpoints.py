"""
Health check endpoint. Public, no database access.
"""

from fastapi import APIRouter, Depends

from trip_planner.config.settings import Settings
from trip_planner.core.dependencies import get_app_settings
from trip_planner.core.identifiers import now_iso
from trip_planner.schemas.base import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_app_settings)):
    return HealthResponse(service=settings.app_name, now=now_iso())

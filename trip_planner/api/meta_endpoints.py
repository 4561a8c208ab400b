"""
Meta API endpoints - application-wide key/value settings
"""
from fastapi import APIRouter, Depends

from trip_planner.core.dependencies import get_meta_service, read_json_body
from trip_planner.core.validation import JsonBody
from trip_planner.schemas.base import ItemEnvelope
from trip_planner.schemas.resources import MetaRead
from trip_planner.services.meta_service import MetaService

router = APIRouter(prefix="/api/meta", tags=["meta"])


@router.get("/{key}", response_model=ItemEnvelope[MetaRead])
async def get_meta(key: str, service: MetaService = Depends(get_meta_service)):
    item = await service.get_meta(key)
    return ItemEnvelope[MetaRead](item=MetaRead.model_validate(item))


@router.put("/{key}", response_model=ItemEnvelope[MetaRead])
async def put_meta(
    key: str,
    body: JsonBody = Depends(read_json_body),
    service: MetaService = Depends(get_meta_service),
):
    """
    Store any JSON value under ``key``, replacing the previous one

    - **value**: Required, may be null
    """
    item = await service.put_meta(key, body)
    return ItemEnvelope[MetaRead](item=MetaRead.model_validate(item))

"""
Resource API endpoints - days, plans, expenses, flights and hotels.

Every kind gets the same four routes:

    GET    /api/trips/{trip_id}/{kind}
    POST   /api/trips/{trip_id}/{kind}
    PATCH  /api/{kind}/{item_id}
    DELETE /api/{kind}/{item_id}
"""
from fastapi import APIRouter, Depends

from trip_planner.core.dependencies import get_resource_service, read_json_body
from trip_planner.core.validation import JsonBody
from trip_planner.schemas.base import ItemEnvelope, ListEnvelope, DeletedEnvelope
from trip_planner.services.resource_service import RESOURCES, ResourceDefinition, ResourceService

router = APIRouter(prefix="/api")


def _register(resource: ResourceDefinition) -> None:
    name = resource.name
    schema = resource.read_schema
    list_model = ListEnvelope[schema]
    item_model = ItemEnvelope[schema]

    async def list_items(trip_id: str, service: ResourceService = Depends(get_resource_service)):
        items = await service.list_items(trip_id, name)
        return list_model(items=[schema.model_validate(i) for i in items])

    async def create_item(
        trip_id: str,
        body: JsonBody = Depends(read_json_body),
        service: ResourceService = Depends(get_resource_service),
    ):
        item = await service.create_item(trip_id, name, body)
        return item_model(item=schema.model_validate(item))

    async def patch_item(
        item_id: str,
        body: JsonBody = Depends(read_json_body),
        service: ResourceService = Depends(get_resource_service),
    ):
        item = await service.patch_item(name, item_id, body)
        return item_model(item=schema.model_validate(item))

    async def delete_item(item_id: str, service: ResourceService = Depends(get_resource_service)):
        deleted_id = await service.delete_item(name, item_id)
        return DeletedEnvelope(id=deleted_id)

    tags = [name]
    router.add_api_route(
        f"/trips/{{trip_id}}/{name}", list_items, methods=["GET"],
        response_model=list_model, tags=tags, name=f"list_{name}",
    )
    router.add_api_route(
        f"/trips/{{trip_id}}/{name}", create_item, methods=["POST"],
        response_model=item_model, tags=tags, name=f"create_{name}",
    )
    router.add_api_route(
        f"/{name}/{{item_id}}", patch_item, methods=["PATCH"],
        response_model=item_model, tags=tags, name=f"patch_{name}",
    )
    router.add_api_route(
        f"/{name}/{{item_id}}", delete_item, methods=["DELETE"],
        response_model=DeletedEnvelope, tags=tags, name=f"delete_{name}",
    )


for _resource in RESOURCES.values():
    _register(_resource)

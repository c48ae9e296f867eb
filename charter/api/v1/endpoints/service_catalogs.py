"""
CRUD routers for the add-on service catalogs.

The three catalogs behave the same, so one factory builds all of them.
"""

from typing import Any, List, Type

from fastapi import APIRouter, Query
from pydantic import BaseModel

from charter.core.common_deps import (
    AdditionalServiceServiceDep,
    AdminUserDep,
    FoodItemServiceDep,
    WaterSportServiceDep,
)
from charter.schemas.responses import MessageResponse
from charter.schemas.service_catalog import (
    AdditionalService,
    AdditionalServiceCreate,
    AdditionalServiceUpdate,
    FoodItem,
    FoodItemCreate,
    FoodItemUpdate,
    WaterSport,
    WaterSportCreate,
    WaterSportUpdate,
)


def build_catalog_router(
    service_dep: Any,
    read_schema: Type[BaseModel],
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    entity_name: str,
) -> APIRouter:
    router = APIRouter()

    @router.get("/", response_model=List[read_schema])
    async def get_items(
        service: service_dep,
        active_only: bool = Query(True, description="Hide deactivated items"),
    ):
        return await service.get_all(active_only=active_only)

    @router.get("/{item_id}", response_model=read_schema)
    async def get_item(item_id: int, service: service_dep):
        return await service.get_active(item_id)

    @router.post("/", response_model=read_schema)
    async def create_item(
        item_data: create_schema, service: service_dep, current_user: AdminUserDep
    ):
        return await service.create(item_data)

    @router.put("/{item_id}", response_model=read_schema)
    async def update_item(
        item_id: int,
        item_data: update_schema,
        service: service_dep,
        current_user: AdminUserDep,
    ):
        return await service.update(item_id, item_data)

    @router.delete("/{item_id}", response_model=MessageResponse)
    async def delete_item(item_id: int, service: service_dep, current_user: AdminUserDep):
        await service.delete(item_id)
        return MessageResponse(message=f"{entity_name} deleted successfully")

    return router


water_sports_router = build_catalog_router(
    WaterSportServiceDep, WaterSport, WaterSportCreate, WaterSportUpdate, "Water sport"
)
food_router = build_catalog_router(
    FoodItemServiceDep, FoodItem, FoodItemCreate, FoodItemUpdate, "Food item"
)
additional_services_router = build_catalog_router(
    AdditionalServiceServiceDep,
    AdditionalService,
    AdditionalServiceCreate,
    AdditionalServiceUpdate,
    "Additional service",
)

from typing import List, Optional

from fastapi import APIRouter, Query

from charter.core.common_deps import AdminUserDep, YachtServiceDep
from charter.schemas.responses import MessageResponse
from charter.schemas.yacht import (
    Yacht,
    YachtCreate,
    YachtOption,
    YachtOptionCreate,
    YachtOptionUpdate,
    YachtUpdate,
)

router = APIRouter()


@router.get("/", response_model=List[Yacht])
async def get_yachts(
    service: YachtServiceDep,
    available: Optional[bool] = Query(None, description="Filter by availability"),
):
    return await service.get_all(available=available)


@router.post("/", response_model=Yacht)
async def create_yacht(
    yacht_data: YachtCreate,
    service: YachtServiceDep,
    current_user: AdminUserDep,
):
    return await service.create(yacht_data)


# Declared before /{yacht_id} so "options" is not read as an id
@router.put("/options/{option_id}", response_model=YachtOption)
async def update_yacht_option(
    option_id: int,
    option_data: YachtOptionUpdate,
    service: YachtServiceDep,
    current_user: AdminUserDep,
):
    return await service.update_option(option_id, option_data)


@router.delete("/options/{option_id}", response_model=MessageResponse)
async def delete_yacht_option(
    option_id: int,
    service: YachtServiceDep,
    current_user: AdminUserDep,
):
    await service.delete_option(option_id)
    return MessageResponse(message="Yacht option deleted successfully")


@router.get("/{yacht_id}", response_model=Yacht)
async def get_yacht(yacht_id: int, service: YachtServiceDep):
    return await service.get(yacht_id)


@router.put("/{yacht_id}", response_model=Yacht)
async def update_yacht(
    yacht_id: int,
    yacht_data: YachtUpdate,
    service: YachtServiceDep,
    current_user: AdminUserDep,
):
    return await service.update(yacht_id, yacht_data)


@router.delete("/{yacht_id}", response_model=MessageResponse)
async def delete_yacht(
    yacht_id: int,
    service: YachtServiceDep,
    current_user: AdminUserDep,
):
    await service.delete(yacht_id)
    return MessageResponse(message="Yacht deleted successfully")


@router.get("/{yacht_id}/options", response_model=List[YachtOption])
async def get_yacht_options(
    yacht_id: int,
    service: YachtServiceDep,
    include_inactive: bool = Query(False, description="Also list deactivated options"),
):
    return await service.get_options(yacht_id, active_only=not include_inactive)


@router.post("/{yacht_id}/options", response_model=YachtOption)
async def create_yacht_option(
    yacht_id: int,
    option_data: YachtOptionCreate,
    service: YachtServiceDep,
    current_user: AdminUserDep,
):
    return await service.create_option(yacht_id, option_data)

from typing import List, Optional

from fastapi import APIRouter, Query

from charter.core.common_deps import AdminUserDep, PromotionServiceDep
from charter.models.base import CatalogKind
from charter.models.promotion import PromotionCatalog
from charter.schemas.promotion import Promotion, PromotionCreate, PromotionUpdate
from charter.schemas.responses import MessageResponse

router = APIRouter()


@router.get("/active", response_model=List[Promotion])
async def get_active_promotions(
    service: PromotionServiceDep,
    catalog: Optional[PromotionCatalog] = Query(None, description="yachts or services"),
):
    return await service.get_active(catalog)


@router.get("/applicable", response_model=Optional[Promotion])
async def get_applicable_promotion(
    service: PromotionServiceDep,
    item_kind: CatalogKind = Query(...),
    item_id: int = Query(...),
):
    """The promotion a badge should show for this item, or null."""
    return await service.get_applicable(item_kind, item_id)


@router.get("/", response_model=List[Promotion])
async def get_promotions(
    service: PromotionServiceDep,
    current_user: AdminUserDep,
    catalog: Optional[PromotionCatalog] = Query(None),
):
    return await service.get_all(catalog)


@router.post("/", response_model=Promotion)
async def create_promotion(
    promotion_data: PromotionCreate,
    service: PromotionServiceDep,
    current_user: AdminUserDep,
):
    return await service.create(promotion_data)


@router.put("/{promotion_id}", response_model=Promotion)
async def update_promotion(
    promotion_id: int,
    promotion_data: PromotionUpdate,
    service: PromotionServiceDep,
    current_user: AdminUserDep,
):
    return await service.update(promotion_id, promotion_data)


@router.delete("/{promotion_id}", response_model=MessageResponse)
async def delete_promotion(
    promotion_id: int,
    service: PromotionServiceDep,
    current_user: AdminUserDep,
):
    await service.delete(promotion_id)
    return MessageResponse(message="Promotion deleted successfully")

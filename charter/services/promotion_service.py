from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from charter.core.change_feed import change_feed
from charter.core.exceptions import ValidationError
from charter.core.promotions import (
    CATALOG_BY_KIND,
    find_applicable_promotion,
    is_promotion_active,
)
from charter.core.service_utils import ensure_exists
from charter.models.base import CatalogKind
from charter.models.promotion import Promotion, PromotionCatalog
from charter.schemas.promotion import PromotionCreate, PromotionUpdate
from charter.services.service_catalog_service import load_catalog_item


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _validate_promotion(promotion: Promotion) -> None:
    if (
        promotion.valid_from is not None
        and promotion.valid_until is not None
        and _as_utc(promotion.valid_until) < _as_utc(promotion.valid_from)
    ):
        raise ValidationError(
            "valid_until must not be before valid_from",
            "valid_until",
            str(promotion.valid_until),
            key="promotion_window",
        )

    if promotion.item_id is None:
        return
    if promotion.item_kind is None and promotion.catalog == PromotionCatalog.YACHTS:
        promotion.item_kind = CatalogKind.YACHT
    if promotion.item_kind is None:
        raise ValidationError(
            "item_kind is required when a service promotion targets one item",
            "item_kind",
            key="promotion_item_kind",
        )
    if CATALOG_BY_KIND[promotion.item_kind] != promotion.catalog:
        raise ValidationError(
            f"{promotion.item_kind.value} items do not belong to the "
            f"{promotion.catalog.value} catalog",
            "item_kind",
            promotion.item_kind.value,
            key="promotion_catalog_mismatch",
        )


class PromotionService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self, catalog: Optional[PromotionCatalog] = None) -> List[Promotion]:
        stmt = select(Promotion).order_by(Promotion.id)
        if catalog is not None:
            stmt = stmt.where(Promotion.catalog == catalog)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, promotion_id: int) -> Optional[Promotion]:
        result = await self.db.execute(
            select(Promotion).where(Promotion.id == promotion_id)
        )
        return result.scalar_one_or_none()

    async def get_active(
        self, catalog: Optional[PromotionCatalog] = None, now: Optional[datetime] = None
    ) -> List[Promotion]:
        """Promotions currently inside their validity window."""
        promotions = await self.get_all(catalog)
        return [promotion for promotion in promotions if is_promotion_active(promotion, now)]

    async def get_applicable(
        self, item_kind: CatalogKind, item_id: int, now: Optional[datetime] = None
    ) -> Optional[Promotion]:
        item = await load_catalog_item(self.db, item_kind, item_id)
        return await self.find_for_item(item, now)

    async def find_for_item(self, item: Any, now: Optional[datetime] = None) -> Optional[Promotion]:
        promotions = await self.get_all(CATALOG_BY_KIND[item.catalog_kind])
        return find_applicable_promotion(promotions, item, now)

    async def create(self, promotion_data: PromotionCreate) -> Promotion:
        db_promotion = Promotion(**promotion_data.model_dump())
        _validate_promotion(db_promotion)

        self.db.add(db_promotion)
        await self.db.commit()
        await self.db.refresh(db_promotion)
        change_feed.publish("promotions", "INSERT")
        return db_promotion

    async def update(
        self, promotion_id: int, promotion_data: PromotionUpdate
    ) -> Promotion:
        db_promotion = ensure_exists(
            await self.get_by_id(promotion_id), "Promotion", promotion_id
        )

        update_data = promotion_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_promotion, field, value)
        _validate_promotion(db_promotion)

        await self.db.commit()
        await self.db.refresh(db_promotion)
        change_feed.publish("promotions", "UPDATE")
        return db_promotion

    async def delete(self, promotion_id: int) -> bool:
        db_promotion = ensure_exists(
            await self.get_by_id(promotion_id), "Promotion", promotion_id
        )
        await self.db.delete(db_promotion)
        await self.db.commit()
        change_feed.publish("promotions", "DELETE")
        return True

from typing import Any, List, Optional

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from charter.core.change_feed import change_feed
from charter.core.exceptions import ValidationError
from charter.core.service_utils import ensure_exists, ensure_sellable
from charter.models.base import CatalogKind
from charter.models.service_catalog import AdditionalService, FoodItem, WaterSport
from charter.models.yacht import Yacht

CATALOG_MODELS = {
    CatalogKind.YACHT: Yacht,
    CatalogKind.WATER_SPORT: WaterSport,
    CatalogKind.FOOD: FoodItem,
    CatalogKind.ADDITIONAL_SERVICE: AdditionalService,
}


async def load_catalog_item(db: AsyncSession, kind: CatalogKind, item_id: int) -> Any:
    """Fetch any catalog item by kind and id, or raise EntityNotFoundError."""
    model = CATALOG_MODELS[kind]
    result = await db.execute(select(model).where(model.id == item_id))
    return ensure_exists(
        result.scalar_one_or_none(), kind.value.replace("_", " ").capitalize(), item_id
    )


def require_service_kind(kind: CatalogKind) -> CatalogKind:
    if kind == CatalogKind.YACHT:
        raise ValidationError(
            "Use the yacht endpoints for yachts",
            "item_kind",
            kind.value,
            key="yacht_not_a_service",
        )
    return kind


class CatalogService:
    """CRUD for one of the add-on service catalogs."""

    model: Any = None
    entity_name = "Item"

    def __init__(self, db: AsyncSession):
        self.db = db

    @property
    def table(self) -> str:
        return self.model.__tablename__

    async def get_all(self, active_only: bool = False) -> List[Any]:
        stmt = select(self.model).order_by(self.model.display_order, self.model.id)
        if active_only:
            stmt = stmt.where(self.model.is_active)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, item_id: int) -> Optional[Any]:
        result = await self.db.execute(select(self.model).where(self.model.id == item_id))
        return result.scalar_one_or_none()

    async def get_active(self, item_id: int) -> Any:
        """Item that can still be sold; inactive items count as missing."""
        return ensure_sellable(await self.get_by_id(item_id), self.entity_name, item_id)

    async def create(self, data: BaseModel) -> Any:
        db_item = self.model(**data.model_dump())
        self.db.add(db_item)
        await self.db.commit()
        await self.db.refresh(db_item)
        change_feed.publish(self.table, "INSERT")
        return db_item

    async def update(self, item_id: int, data: BaseModel) -> Any:
        db_item = ensure_exists(await self.get_by_id(item_id), self.entity_name, item_id)

        update_data = data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_item, field, value)

        await self.db.commit()
        await self.db.refresh(db_item)
        change_feed.publish(self.table, "UPDATE")
        return db_item

    async def delete(self, item_id: int) -> bool:
        db_item = ensure_exists(await self.get_by_id(item_id), self.entity_name, item_id)

        await self.db.delete(db_item)
        await self.db.commit()
        change_feed.publish(self.table, "DELETE")
        return True


class WaterSportService(CatalogService):
    model = WaterSport
    entity_name = "Water sport"


class FoodItemService(CatalogService):
    model = FoodItem
    entity_name = "Food item"


class AdditionalServiceService(CatalogService):
    model = AdditionalService
    entity_name = "Additional service"

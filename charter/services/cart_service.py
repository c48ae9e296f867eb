import logging
import uuid
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from charter.core.change_feed import change_feed
from charter.core.config import settings
from charter.core.pricing import ZERO, resolve_unit_price, round_money
from charter.core.service_utils import ensure_exists, validate_non_empty_string
from charter.models.cart import CartItemType, ServiceCartItem
from charter.schemas.cart import FoodCartAdd, WaterSportCartAdd
from charter.services.service_catalog_service import FoodItemService, WaterSportService

logger = logging.getLogger(__name__)


def new_guest_session_id() -> str:
    return f"guest_{uuid.uuid4()}"


class CartService:
    """Services cart keyed by an anonymous guest session id."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_items(self, session_id: str) -> List[ServiceCartItem]:
        session_id = validate_non_empty_string(session_id, "session_id")
        result = await self.db.execute(
            select(ServiceCartItem)
            .where(ServiceCartItem.session_id == session_id)
            .order_by(ServiceCartItem.created_at, ServiceCartItem.id)
        )
        return list(result.scalars().all())

    async def get_cart(self, session_id: str) -> Dict[str, Any]:
        items = await self.get_items(session_id)
        total = sum((Decimal(str(item.price)) for item in items), ZERO)
        return {
            "session_id": session_id,
            "items": items,
            "total": round_money(total),
            "currency": settings.CURRENCY,
        }

    async def _add(self, item: ServiceCartItem) -> ServiceCartItem:
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)
        change_feed.publish("service_cart_items", "INSERT")
        return item

    async def add_water_sport(
        self, session_id: str, data: WaterSportCartAdd
    ) -> ServiceCartItem:
        session_id = validate_non_empty_string(session_id, "session_id")
        water_sport = await WaterSportService(self.db).get_active(data.water_sport_id)
        price = round_money(resolve_unit_price(water_sport, data.duration))
        return await self._add(
            ServiceCartItem(
                session_id=session_id,
                item_type=CartItemType.WATER_SPORT,
                item_id=water_sport.id,
                item_name=water_sport.name,
                quantity=1,
                duration=data.duration,
                price=price,
            )
        )

    async def add_food(self, session_id: str, data: FoodCartAdd) -> ServiceCartItem:
        session_id = validate_non_empty_string(session_id, "session_id")
        food_item = await FoodItemService(self.db).get_active(data.food_item_id)
        price = round_money(resolve_unit_price(food_item, data.quantity))
        return await self._add(
            ServiceCartItem(
                session_id=session_id,
                item_type=CartItemType.FOOD,
                item_id=food_item.id,
                item_name=food_item.name,
                quantity=data.quantity,
                price=price,
            )
        )

    async def remove_item(self, session_id: str, item_id: int) -> bool:
        result = await self.db.execute(
            select(ServiceCartItem).where(
                ServiceCartItem.id == item_id, ServiceCartItem.session_id == session_id
            )
        )
        item = ensure_exists(result.scalar_one_or_none(), "Cart item", item_id)
        await self.db.delete(item)
        await self.db.commit()
        change_feed.publish("service_cart_items", "DELETE")
        return True

    async def clear(self, session_id: str) -> int:
        session_id = validate_non_empty_string(session_id, "session_id")
        result = await self.db.execute(
            delete(ServiceCartItem).where(ServiceCartItem.session_id == session_id)
        )
        await self.db.commit()
        logger.info("Cleared %s cart items for %s", result.rowcount, session_id)
        change_feed.publish("service_cart_items", "DELETE")
        return result.rowcount

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from charter.models.cart import CartItemType


class CartSession(BaseModel):
    session_id: str = Field(..., examples=["guest_2b1f0c9e-5d7a-4c1e-9f61-0c2f4f8e6a11"])


class WaterSportCartAdd(BaseModel):
    water_sport_id: int
    duration: Literal[30, 60] = 30


class FoodCartAdd(BaseModel):
    food_item_id: int
    quantity: int = Field(1, gt=0, description="Number of persons")


class ServiceCartItem(BaseModel):
    id: int
    session_id: str
    item_type: CartItemType
    item_id: int
    item_name: str
    quantity: int
    duration: Optional[int] = None
    price: Decimal = Field(..., description="Line total")
    created_at: datetime

    class Config:
        from_attributes = True


class Cart(BaseModel):
    session_id: str
    items: List[ServiceCartItem]
    total: Decimal
    currency: str

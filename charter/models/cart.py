import enum
from datetime import datetime

from sqlalchemy import Column, DateTime, Enum, Integer, Numeric, String

from charter.models.base import Base


class CartItemType(enum.Enum):
    WATER_SPORT = "water_sport"
    FOOD = "food"


class ServiceCartItem(Base):
    __tablename__ = "service_cart_items"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(String, nullable=False, index=True)  # "guest_<uuid>"
    item_type = Column(Enum(CartItemType), nullable=False)
    item_id = Column(Integer, nullable=False)
    item_name = Column(String, nullable=False)
    quantity = Column(Integer, default=1, nullable=False)
    duration = Column(Integer, nullable=True)  # minutes, water sports only
    price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String, Text

from charter.models.base import Base, CatalogKind


class WaterSport(Base):
    __tablename__ = "water_sports"
    catalog_kind = CatalogKind.WATER_SPORT

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    pax = Column(Integer, default=1, nullable=False)
    price_30min = Column(Numeric(10, 2), nullable=True)
    price_60min = Column(Numeric(10, 2), nullable=True)
    image_url = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    display_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class FoodItem(Base):
    __tablename__ = "food_items"
    catalog_kind = CatalogKind.FOOD

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text)
    price_per_person = Column(Numeric(10, 2), nullable=True)
    image_url = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    display_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class AdditionalService(Base):
    __tablename__ = "additional_services"
    catalog_kind = CatalogKind.ADDITIONAL_SERVICE

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=True)
    image_url = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    display_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

import enum
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, Numeric, String, Text

from charter.models.base import Base, CatalogKind


class PromotionCatalog(enum.Enum):
    YACHTS = "yachts"
    SERVICES = "services"


class Promotion(Base):
    __tablename__ = "promotions"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    code = Column(String, nullable=True)
    description = Column(Text)
    discount_percentage = Column(Numeric(5, 2), nullable=True)
    discount_amount = Column(Numeric(10, 2), nullable=True)

    # item_id = None means the promotion covers the whole catalog
    catalog = Column(
        Enum(PromotionCatalog), default=PromotionCatalog.YACHTS, nullable=False
    )
    item_kind = Column(Enum(CatalogKind), nullable=True)
    item_id = Column(Integer, nullable=True, index=True)

    is_active = Column(Boolean, default=True, nullable=False)
    valid_from = Column(DateTime(timezone=True), nullable=True)
    valid_until = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

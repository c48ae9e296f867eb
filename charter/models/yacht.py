from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from charter.models.base import Base, CatalogKind


class Yacht(Base):
    __tablename__ = "yachts"
    catalog_kind = CatalogKind.YACHT

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text)
    description_ar = Column(Text)
    main_image = Column(String, nullable=True)
    capacity = Column(Integer, nullable=False, default=0)
    length = Column(Numeric(6, 2), nullable=True)
    # Prices are nullable: a missing price is priced as 0 and logged
    price_per_hour = Column(Numeric(10, 2), nullable=True)
    price_per_day = Column(Numeric(10, 2), nullable=True)
    features = Column(JSON, nullable=True)  # ["Jacuzzi", "Sound system"]
    location = Column(String, nullable=True)
    is_available = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    options = relationship(
        "YachtOption",
        back_populates="yacht",
        cascade="all, delete-orphan",
        order_by="YachtOption.display_order",
    )
    bookings = relationship("Booking", back_populates="yacht")


class YachtOption(Base):
    __tablename__ = "yacht_options"

    id = Column(Integer, primary_key=True, index=True)
    yacht_id = Column(
        Integer, ForeignKey("yachts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String, nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2), default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    display_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    yacht = relationship("Yacht", back_populates="options")

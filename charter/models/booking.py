import enum
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from charter.models.base import Base


class BookingStatus(enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class BookingSource(enum.Enum):
    DIRECT = "direct"
    WHATSAPP = "whatsapp"


class DurationType(enum.Enum):
    HOURLY = "hourly"
    DAILY = "daily"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    yacht_id = Column(Integer, ForeignKey("yachts.id"), nullable=False, index=True)
    # Subject of the external identity provider, if the customer was signed in
    user_id = Column(String, nullable=True, index=True)

    # Customer details
    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_phone = Column(String, nullable=False)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    address = Column(Text, nullable=True)
    country = Column(String, nullable=True)

    # Trip details
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    duration_type = Column(
        Enum(DurationType), default=DurationType.HOURLY, nullable=False
    )
    duration_value = Column(Numeric(8, 2), nullable=True)
    number_of_persons = Column(Integer, nullable=True)
    trip_type = Column(String, nullable=True)

    status = Column(Enum(BookingStatus), default=BookingStatus.PENDING, nullable=False)
    booking_source = Column(
        Enum(BookingSource), default=BookingSource.DIRECT, nullable=False
    )

    # Financial information, never reduced by promotions
    total_price = Column(Numeric(10, 2), default=0, nullable=False)
    rate_per_hour = Column(Numeric(10, 2), nullable=True)
    apply_vat = Column(Boolean, default=False, nullable=False)
    other_charges = Column(Numeric(10, 2), default=0, nullable=False)
    discount = Column(Numeric(10, 2), default=0, nullable=False)
    fine_penalty = Column(Numeric(10, 2), default=0, nullable=False)
    coupon_code = Column(String, nullable=True)

    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    yacht = relationship("Yacht", back_populates="bookings")
    options = relationship(
        "BookingOption", back_populates="booking", cascade="all, delete-orphan"
    )


class BookingOption(Base):
    __tablename__ = "booking_options"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(
        Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    option_id = Column(
        Integer, ForeignKey("yacht_options.id", ondelete="SET NULL"), nullable=True
    )
    # Snapshot taken when the booking is made
    option_name = Column(String, nullable=False)
    option_price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    booking = relationship("Booking", back_populates="options")

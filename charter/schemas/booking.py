from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, EmailStr, Field

from charter.models.booking import BookingSource, BookingStatus, DurationType


class BookingDraftCreate(BaseModel):
    """Public booking request. Contact fields are validated by the service so that
    every field error comes back in the visitor's language."""

    yacht_id: int
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    hours: Union[int, float] = 1
    selected_option_ids: List[int] = []
    start_date: Optional[datetime] = None
    notes: Optional[str] = None


class AdminBookingCreate(BaseModel):
    """Booking entered by staff through the back-office form."""

    yacht_id: int
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    customer_email: EmailStr
    customer_phone: str = Field(min_length=1)
    address: Optional[str] = None
    country: Optional[str] = None
    start_date: datetime
    end_date: datetime
    duration_type: DurationType = DurationType.HOURLY
    duration_value: Decimal = Field(gt=0, description="Hours or days, per duration_type")
    number_of_persons: Optional[int] = Field(None, gt=0)
    trip_type: Optional[str] = None
    rate_per_hour: Optional[Decimal] = Field(
        None, ge=0, description="Defaults to the yacht's hourly price"
    )
    apply_vat: bool = True
    other_charges: Decimal = Field(Decimal("0"), ge=0)
    discount: Decimal = Field(Decimal("0"), ge=0)
    fine_penalty: Decimal = Field(Decimal("0"), ge=0)
    coupon_code: Optional[str] = None
    status: BookingStatus = BookingStatus.CONFIRMED
    notes: Optional[str] = None


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class BookingOption(BaseModel):
    id: int
    option_id: Optional[int] = None
    option_name: str
    option_price: Decimal
    created_at: datetime

    class Config:
        from_attributes = True


class Booking(BaseModel):
    id: int
    yacht_id: int
    user_id: Optional[str] = None
    customer_name: str
    customer_email: str
    customer_phone: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address: Optional[str] = None
    country: Optional[str] = None
    start_date: datetime
    end_date: datetime
    duration_type: DurationType
    duration_value: Optional[Decimal] = None
    number_of_persons: Optional[int] = None
    trip_type: Optional[str] = None
    status: BookingStatus
    booking_source: BookingSource
    total_price: Decimal
    rate_per_hour: Optional[Decimal] = None
    apply_vat: bool
    other_charges: Decimal
    discount: Decimal
    fine_penalty: Decimal
    coupon_code: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    options: List[BookingOption] = []

    class Config:
        from_attributes = True


class BookingSubmitted(BaseModel):
    message: str = Field(
        ..., examples=["Booking submitted successfully! Your booking will be reviewed soon"]
    )
    booking: Booking


class BookingStats(BaseModel):
    total_yachts: int
    total_bookings: int
    pending_bookings: int
    total_amount: Decimal = Field(..., description="Sum of non-cancelled booking totals")
    by_status: Dict[str, int] = Field(..., examples=[{"pending": 3, "confirmed": 5, "cancelled": 1}])

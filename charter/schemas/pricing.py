from decimal import Decimal
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

from charter.models.base import CatalogKind
from charter.models.booking import DurationType
from charter.schemas.promotion import Promotion


class YachtQuoteRequest(BaseModel):
    yacht_id: int
    quantity: Union[int, float] = Field(1, description="Hours, or days for a daily quote")
    duration_type: DurationType = DurationType.HOURLY
    selected_option_ids: List[int] = []


class ServiceQuoteRequest(BaseModel):
    item_kind: CatalogKind = Field(..., description="Any kind except yacht")
    item_id: int
    quantity: int = Field(
        1, description="Minutes for water sports (30 or 60), persons for food"
    )


class PriceQuote(BaseModel):
    unit_price: Decimal
    options_total: Decimal
    total_price: Decimal
    currency: str
    promotion: Optional[Promotion] = None
    promotional_price: Optional[Decimal] = Field(
        None, description="Display only; the total is never discounted"
    )


class WaterSportExtraRequest(BaseModel):
    water_sport_id: int
    duration: Literal[30, 60] = 30


class FoodExtraRequest(BaseModel):
    food_item_id: int
    quantity: int = Field(1, gt=0)


class ExtrasRequest(BaseModel):
    water_sports: List[WaterSportExtraRequest] = []
    food: List[FoodExtraRequest] = []
    additional_service_ids: List[int] = []


class WhatsAppLinkRequest(BaseModel):
    yacht_id: int
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    hours: Union[int, float] = 1
    selected_option_ids: List[int] = []
    extras: Optional[ExtrasRequest] = None


class ServiceInquiryRequest(BaseModel):
    item_kind: CatalogKind
    item_id: int


class WhatsAppLink(BaseModel):
    url: str = Field(..., examples=["https://wa.me/971501234567?text=Hello!..."])
    message: str = Field(..., description="URL-encoded message text")

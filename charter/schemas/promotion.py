from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from charter.models.base import CatalogKind
from charter.models.promotion import PromotionCatalog


class PromotionBase(BaseModel):
    title: str = Field(min_length=1)
    code: Optional[str] = None
    description: Optional[str] = None
    discount_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    discount_amount: Optional[Decimal] = Field(None, ge=0)
    catalog: PromotionCatalog = PromotionCatalog.YACHTS
    item_kind: Optional[CatalogKind] = Field(
        None, description="Kind of the targeted item; omit for a catalog-wide promotion"
    )
    item_id: Optional[int] = None
    is_active: bool = True
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None


class PromotionCreate(PromotionBase):
    pass


class PromotionUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    code: Optional[str] = None
    description: Optional[str] = None
    discount_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    discount_amount: Optional[Decimal] = Field(None, ge=0)
    catalog: Optional[PromotionCatalog] = None
    item_kind: Optional[CatalogKind] = None
    item_id: Optional[int] = None
    is_active: Optional[bool] = None
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None


class Promotion(PromotionBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

from datetime import datetime
from decimal import Decimal
from typing import ClassVar, List, Optional

from pydantic import BaseModel, Field

from charter.models.base import CatalogKind


class YachtOptionBase(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: Decimal = Field(
        Decimal("0"), ge=0, description="Flat price added once per booking"
    )
    is_active: bool = True
    display_order: int = 0


class YachtOptionCreate(YachtOptionBase):
    pass


class YachtOptionUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    is_active: Optional[bool] = None
    display_order: Optional[int] = None


class YachtOption(YachtOptionBase):
    id: int
    yacht_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class YachtBase(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    main_image: Optional[str] = None
    capacity: int = Field(0, ge=0)
    length: Optional[Decimal] = Field(None, ge=0, description="Length in feet")
    price_per_hour: Optional[Decimal] = Field(None, ge=0)
    price_per_day: Optional[Decimal] = Field(None, ge=0)
    features: Optional[List[str]] = None
    location: Optional[str] = None
    is_available: bool = True


class YachtCreate(YachtBase):
    pass


class YachtUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    main_image: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=0)
    length: Optional[Decimal] = Field(None, ge=0)
    price_per_hour: Optional[Decimal] = Field(None, ge=0)
    price_per_day: Optional[Decimal] = Field(None, ge=0)
    features: Optional[List[str]] = None
    location: Optional[str] = None
    is_available: Optional[bool] = None


class Yacht(YachtBase):
    # Lets API payloads be priced with the same functions as ORM rows
    catalog_kind: ClassVar[CatalogKind] = CatalogKind.YACHT

    id: int
    created_at: datetime
    updated_at: datetime
    options: List[YachtOption] = []

    class Config:
        from_attributes = True

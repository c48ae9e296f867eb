from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Optional

from pydantic import BaseModel, Field

from charter.models.base import CatalogKind


class WaterSportBase(BaseModel):
    name: str = Field(min_length=1)
    pax: int = Field(1, gt=0, description="Maximum riders")
    price_30min: Optional[Decimal] = Field(None, ge=0)
    price_60min: Optional[Decimal] = Field(None, ge=0)
    image_url: Optional[str] = None
    is_active: bool = True
    display_order: int = 0


class WaterSportCreate(WaterSportBase):
    pass


class WaterSportUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    pax: Optional[int] = Field(None, gt=0)
    price_30min: Optional[Decimal] = Field(None, ge=0)
    price_60min: Optional[Decimal] = Field(None, ge=0)
    image_url: Optional[str] = None
    is_active: Optional[bool] = None
    display_order: Optional[int] = None


class WaterSport(WaterSportBase):
    catalog_kind: ClassVar[CatalogKind] = CatalogKind.WATER_SPORT

    id: int
    created_at: datetime

    class Config:
        from_attributes = True


class FoodItemBase(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price_per_person: Optional[Decimal] = Field(None, ge=0)
    image_url: Optional[str] = None
    is_active: bool = True
    display_order: int = 0


class FoodItemCreate(FoodItemBase):
    pass


class FoodItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price_per_person: Optional[Decimal] = Field(None, ge=0)
    image_url: Optional[str] = None
    is_active: Optional[bool] = None
    display_order: Optional[int] = None


class FoodItem(FoodItemBase):
    catalog_kind: ClassVar[CatalogKind] = CatalogKind.FOOD

    id: int
    created_at: datetime

    class Config:
        from_attributes = True


class AdditionalServiceBase(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    image_url: Optional[str] = None
    is_active: bool = True
    display_order: int = 0


class AdditionalServiceCreate(AdditionalServiceBase):
    pass


class AdditionalServiceUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    image_url: Optional[str] = None
    is_active: Optional[bool] = None
    display_order: Optional[int] = None


class AdditionalService(AdditionalServiceBase):
    catalog_kind: ClassVar[CatalogKind] = CatalogKind.ADDITIONAL_SERVICE

    id: int
    created_at: datetime

    class Config:
        from_attributes = True

"""
Service dependency injection utilities.

Endpoints declare the service they need as an ``Annotated`` type; FastAPI builds
it with the request's database session.
"""

from typing import Annotated, Callable, Type, TypeVar

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from charter.core.database import get_db
from charter.services.booking_service import BookingService
from charter.services.cart_service import CartService
from charter.services.pricing_service import PricingService
from charter.services.promotion_service import PromotionService
from charter.services.service_catalog_service import (
    AdditionalServiceService,
    FoodItemService,
    WaterSportService,
)
from charter.services.settings_service import SettingsService
from charter.services.yacht_service import YachtService

T = TypeVar("T")


def get_service(service_class: Type[T]) -> Callable[[AsyncSession], T]:
    """
    Generic service dependency factory.

    Args:
        service_class: The service class to instantiate

    Returns:
        A dependency function that creates service instances
    """

    def dependency(db: AsyncSession = Depends(get_db)) -> T:
        return service_class(db)

    return dependency


GetYachtService = Annotated[YachtService, Depends(get_service(YachtService))]
GetWaterSportService = Annotated[
    WaterSportService, Depends(get_service(WaterSportService))
]
GetFoodItemService = Annotated[FoodItemService, Depends(get_service(FoodItemService))]
GetAdditionalServiceService = Annotated[
    AdditionalServiceService, Depends(get_service(AdditionalServiceService))
]
GetPromotionService = Annotated[PromotionService, Depends(get_service(PromotionService))]
GetPricingService = Annotated[PricingService, Depends(get_service(PricingService))]
GetBookingService = Annotated[BookingService, Depends(get_service(BookingService))]
GetCartService = Annotated[CartService, Depends(get_service(CartService))]
GetSettingsService = Annotated[SettingsService, Depends(get_service(SettingsService))]

from .booking_service import BookingService
from .cart_service import CartService
from .pricing_service import PricingService
from .promotion_service import PromotionService
from .service_catalog_service import (
    AdditionalServiceService,
    FoodItemService,
    WaterSportService,
)
from .settings_service import SettingsService
from .yacht_service import YachtService

__all__ = [
    "YachtService",
    "WaterSportService",
    "FoodItemService",
    "AdditionalServiceService",
    "PromotionService",
    "PricingService",
    "BookingService",
    "CartService",
    "SettingsService",
]

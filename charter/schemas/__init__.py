from .yacht import Yacht, YachtCreate, YachtUpdate, YachtOption, YachtOptionCreate, YachtOptionUpdate
from .service_catalog import (
    AdditionalService,
    AdditionalServiceCreate,
    AdditionalServiceUpdate,
    FoodItem,
    FoodItemCreate,
    FoodItemUpdate,
    WaterSport,
    WaterSportCreate,
    WaterSportUpdate,
)
from .promotion import Promotion, PromotionCreate, PromotionUpdate
from .booking import (
    AdminBookingCreate,
    Booking,
    BookingDraftCreate,
    BookingOption,
    BookingStatusUpdate,
    BookingSubmitted,
)
from .cart import Cart, CartSession, FoodCartAdd, ServiceCartItem, WaterSportCartAdd
from .settings import WhatsAppNumber, WhatsAppNumberUpdate

__all__ = [
    # Yacht schemas
    "Yacht", "YachtCreate", "YachtUpdate",
    "YachtOption", "YachtOptionCreate", "YachtOptionUpdate",
    # Service catalog schemas
    "WaterSport", "WaterSportCreate", "WaterSportUpdate",
    "FoodItem", "FoodItemCreate", "FoodItemUpdate",
    "AdditionalService", "AdditionalServiceCreate", "AdditionalServiceUpdate",
    # Promotion schemas
    "Promotion", "PromotionCreate", "PromotionUpdate",
    # Booking schemas
    "Booking", "BookingDraftCreate", "AdminBookingCreate", "BookingOption",
    "BookingStatusUpdate", "BookingSubmitted",
    # Cart schemas
    "Cart", "CartSession", "ServiceCartItem", "WaterSportCartAdd", "FoodCartAdd",
    # Settings schemas
    "WhatsAppNumber", "WhatsAppNumberUpdate",
]

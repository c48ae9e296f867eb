from charter.models.base import Base, CatalogKind
from charter.models.booking import (
    Booking,
    BookingOption,
    BookingSource,
    BookingStatus,
    DurationType,
)
from charter.models.cart import CartItemType, ServiceCartItem
from charter.models.promotion import Promotion, PromotionCatalog
from charter.models.service_catalog import AdditionalService, FoodItem, WaterSport
from charter.models.site_setting import WHATSAPP_NUMBER_KEY, SiteSetting
from charter.models.user import AppRole, UserRoleAssignment
from charter.models.yacht import Yacht, YachtOption

__all__ = [
    "Base",
    "CatalogKind",
    "Yacht",
    "YachtOption",
    "WaterSport",
    "FoodItem",
    "AdditionalService",
    "Promotion",
    "PromotionCatalog",
    "Booking",
    "BookingOption",
    "BookingStatus",
    "BookingSource",
    "DurationType",
    "ServiceCartItem",
    "CartItemType",
    "SiteSetting",
    "WHATSAPP_NUMBER_KEY",
    "AppRole",
    "UserRoleAssignment",
]

"""
Common dependencies for the charter API.

This module provides convenient access to commonly used dependencies,
reducing boilerplate code in endpoint functions.
"""

from typing import Annotated, Optional

from fastapi import Depends, Header

from charter.core.auth_deps import OptionalUser, RequireAdminRole, RequireUser
from charter.core.i18n import normalize_language
from charter.core.service_deps import (
    GetAdditionalServiceService,
    GetBookingService,
    GetCartService,
    GetFoodItemService,
    GetPricingService,
    GetPromotionService,
    GetSettingsService,
    GetWaterSportService,
    GetYachtService,
)


def get_language(accept_language: Annotated[Optional[str], Header()] = None) -> str:
    return normalize_language(accept_language)


# Caller dependencies
AdminUserDep = RequireAdminRole
CurrentUserDep = RequireUser
OptionalUserDep = OptionalUser
LanguageDep = Annotated[str, Depends(get_language)]

# Service type aliases for cleaner endpoint signatures
YachtServiceDep = GetYachtService
WaterSportServiceDep = GetWaterSportService
FoodItemServiceDep = GetFoodItemService
AdditionalServiceServiceDep = GetAdditionalServiceService
PromotionServiceDep = GetPromotionService
PricingServiceDep = GetPricingService
BookingServiceDep = GetBookingService
CartServiceDep = GetCartService
SettingsServiceDep = GetSettingsService

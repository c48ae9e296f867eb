from fastapi import APIRouter

from charter.api.v1.endpoints import (
    auth,
    bookings,
    cart,
    changes,
    pricing,
    promotions,
    service_catalogs,
    site_settings,
    yachts,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(yachts.router, prefix="/yachts", tags=["yachts"])
api_router.include_router(
    service_catalogs.water_sports_router, prefix="/water-sports", tags=["water-sports"]
)
api_router.include_router(service_catalogs.food_router, prefix="/food", tags=["food"])
api_router.include_router(
    service_catalogs.additional_services_router,
    prefix="/additional-services",
    tags=["additional-services"],
)
api_router.include_router(promotions.router, prefix="/promotions", tags=["promotions"])
api_router.include_router(pricing.router, prefix="/pricing", tags=["pricing"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(cart.router, prefix="/cart", tags=["cart"])
api_router.include_router(site_settings.router, prefix="/settings", tags=["settings"])
api_router.include_router(changes.router, tags=["changes"])

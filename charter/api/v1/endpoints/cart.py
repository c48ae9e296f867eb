from fastapi import APIRouter

from charter.core.common_deps import CartServiceDep
from charter.schemas.cart import (
    Cart,
    CartSession,
    FoodCartAdd,
    ServiceCartItem,
    WaterSportCartAdd,
)
from charter.schemas.responses import MessageResponse
from charter.services.cart_service import new_guest_session_id

router = APIRouter()


@router.post("/session", response_model=CartSession)
async def create_cart_session():
    return CartSession(session_id=new_guest_session_id())


@router.get("/{session_id}", response_model=Cart)
async def get_cart(session_id: str, service: CartServiceDep):
    return await service.get_cart(session_id)


@router.delete("/{session_id}", response_model=MessageResponse)
async def clear_cart(session_id: str, service: CartServiceDep):
    await service.clear(session_id)
    return MessageResponse(message="Cart cleared successfully")


@router.post("/{session_id}/water-sports", response_model=ServiceCartItem)
async def add_water_sport(
    session_id: str, item: WaterSportCartAdd, service: CartServiceDep
):
    return await service.add_water_sport(session_id, item)


@router.post("/{session_id}/food", response_model=ServiceCartItem)
async def add_food(session_id: str, item: FoodCartAdd, service: CartServiceDep):
    return await service.add_food(session_id, item)


@router.delete("/{session_id}/items/{item_id}", response_model=MessageResponse)
async def remove_cart_item(session_id: str, item_id: int, service: CartServiceDep):
    await service.remove_item(session_id, item_id)
    return MessageResponse(message="Item removed from cart")

from typing import List, Optional

from fastapi import APIRouter, Query

from charter.core.common_deps import (
    AdminUserDep,
    BookingServiceDep,
    LanguageDep,
    OptionalUserDep,
)
from charter.core.i18n import message
from charter.models.booking import BookingStatus
from charter.schemas.booking import (
    AdminBookingCreate,
    Booking,
    BookingDraftCreate,
    BookingStats,
    BookingStatusUpdate,
    BookingSubmitted,
)
from charter.schemas.responses import MessageResponse

router = APIRouter()


@router.post("/", response_model=BookingSubmitted, status_code=201)
async def submit_booking(
    booking_data: BookingDraftCreate,
    service: BookingServiceDep,
    current_user: OptionalUserDep,
    language: LanguageDep,
):
    booking = await service.create_from_draft(
        booking_data,
        user_id=current_user.id if current_user else None,
        language=language,
    )
    return BookingSubmitted(
        message=message("booking_submitted", language),
        booking=Booking.model_validate(booking),
    )


@router.get("/", response_model=List[Booking])
async def get_bookings(
    service: BookingServiceDep,
    current_user: AdminUserDep,
    status: Optional[BookingStatus] = Query(None, description="Filter by status"),
    yacht_id: Optional[int] = Query(None, description="Filter by yacht"),
):
    return await service.get_all(status=status, yacht_id=yacht_id)


@router.post("/admin", response_model=Booking, status_code=201)
async def create_admin_booking(
    booking_data: AdminBookingCreate,
    service: BookingServiceDep,
    current_user: AdminUserDep,
):
    return await service.create_admin_booking(booking_data)


@router.get("/stats", response_model=BookingStats)
async def get_booking_stats(service: BookingServiceDep, current_user: AdminUserDep):
    return await service.get_stats()


@router.get("/{booking_id}", response_model=Booking)
async def get_booking(
    booking_id: int, service: BookingServiceDep, current_user: AdminUserDep
):
    return await service.get(booking_id)


@router.patch("/{booking_id}/status", response_model=Booking)
async def update_booking_status(
    booking_id: int,
    status_data: BookingStatusUpdate,
    service: BookingServiceDep,
    current_user: AdminUserDep,
):
    return await service.update_status(booking_id, status_data.status)


@router.delete("/{booking_id}", response_model=MessageResponse)
async def delete_booking(
    booking_id: int, service: BookingServiceDep, current_user: AdminUserDep
):
    await service.delete(booking_id)
    return MessageResponse(message="Booking deleted successfully")

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from charter.core.booking_draft import BookingDraft, validate_booking_draft
from charter.core.change_feed import change_feed
from charter.core.exceptions import (
    BackendError,
    BusinessRuleViolationError,
    FieldValidationError,
)
from charter.core.i18n import message
from charter.core.pricing import (
    compute_admin_total,
    compute_total_price,
    round_money,
    select_options,
    to_decimal,
)
from charter.core.service_utils import ensure_exists, validate_date_range
from charter.models.booking import (
    Booking,
    BookingOption,
    BookingSource,
    BookingStatus,
    DurationType,
)
from charter.models.yacht import Yacht, YachtOption
from charter.schemas.booking import AdminBookingCreate, BookingDraftCreate, BookingStats
from charter.services.yacht_service import YachtService

logger = logging.getLogger(__name__)


class BookingService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(
        self,
        status: Optional[BookingStatus] = None,
        yacht_id: Optional[int] = None,
    ) -> List[Booking]:
        stmt = (
            select(Booking)
            .options(selectinload(Booking.options))
            .order_by(Booking.created_at.desc(), Booking.id.desc())
        )
        if status is not None:
            stmt = stmt.where(Booking.status == status)
        if yacht_id is not None:
            stmt = stmt.where(Booking.yacht_id == yacht_id)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_stats(self) -> BookingStats:
        """Fleet size plus booking counts and amounts per status, for the admin overview.

        ``total_amount`` leaves cancelled bookings out.
        """
        yachts = await self.db.execute(select(func.count(Yacht.id)))
        rows = await self.db.execute(
            select(Booking.status, func.count(Booking.id), func.sum(Booking.total_price))
            .group_by(Booking.status)
        )

        by_status = {status.value: 0 for status in BookingStatus}
        total_amount = Decimal("0")
        for status, count, amount in rows.all():
            by_status[status.value] = count
            if status != BookingStatus.CANCELLED:
                total_amount += to_decimal(amount)

        return BookingStats(
            total_yachts=yachts.scalar_one(),
            total_bookings=sum(by_status.values()),
            pending_bookings=by_status[BookingStatus.PENDING.value],
            total_amount=round_money(total_amount),
            by_status=by_status,
        )

    async def get_by_id(self, booking_id: int) -> Optional[Booking]:
        stmt = (
            select(Booking)
            .options(selectinload(Booking.options))
            .where(Booking.id == booking_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get(self, booking_id: int) -> Booking:
        return ensure_exists(await self.get_by_id(booking_id), "Booking", booking_id)

    async def _snapshot_options(
        self, booking: Booking, options: Sequence[YachtOption]
    ) -> None:
        """Copy option names and prices onto the booking as they are right now."""
        for option in options:
            self.db.add(
                BookingOption(
                    booking_id=booking.id,
                    option_id=option.id,
                    option_name=option.name,
                    option_price=option.price,
                )
            )
        await self.db.flush()

    async def _insert(
        self, booking: Booking, options: Sequence[YachtOption], operation: str
    ) -> Booking:
        """Insert the booking and its option rows as one unit, or neither."""
        try:
            self.db.add(booking)
            await self.db.flush()
            await self._snapshot_options(booking, options)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise BackendError.from_exception(exc, operation) from exc

        change_feed.publish("bookings", "INSERT")
        return await self.get(booking.id)

    async def create_from_draft(
        self,
        booking_data: BookingDraftCreate,
        user_id: Optional[str] = None,
        language: str = "en",
    ) -> Booking:
        """
        Store a public booking request as ``pending``.

        The draft is validated before anything touches the database, the total is
        computed by the pricing core, and the selected options are snapshotted in
        the same transaction as the booking row.

        Raises:
            EntityNotFoundError: unknown yacht
            FieldValidationError: invalid contact details or hours
            BusinessRuleViolationError: yacht not available for booking
            BackendError: the insert failed; nothing was stored
        """
        yacht: Yacht = await YachtService(self.db).get(booking_data.yacht_id)

        draft = BookingDraft(
            customer_name=booking_data.customer_name,
            customer_email=booking_data.customer_email,
            customer_phone=booking_data.customer_phone,
            hours=booking_data.hours,
            selected_option_ids=list(booking_data.selected_option_ids),
        )
        validation = validate_booking_draft(draft, language)
        if not validation.valid:
            raise FieldValidationError(
                validation.field_errors, message("invalid_input", language)
            )

        if not yacht.is_available:
            raise BusinessRuleViolationError(
                "yacht_unavailable",
                message("yacht_unavailable", language),
                {"yacht_id": yacht.id},
            )

        draft = draft.cleaned()
        available_options = [option for option in yacht.options if option.is_active]
        selected = select_options(draft.selected_option_ids, available_options)
        total_price = compute_total_price(
            yacht, draft.hours, draft.selected_option_ids, available_options
        )

        start_date = booking_data.start_date or datetime.utcnow()
        booking = Booking(
            yacht_id=yacht.id,
            user_id=user_id,
            customer_name=draft.customer_name,
            customer_email=draft.customer_email,
            customer_phone=draft.customer_phone,
            start_date=start_date,
            end_date=start_date + timedelta(hours=draft.hours),
            duration_type=DurationType.HOURLY,
            duration_value=draft.hours,
            status=BookingStatus.PENDING,
            booking_source=BookingSource.DIRECT,
            total_price=total_price,
            rate_per_hour=yacht.price_per_hour,
            apply_vat=False,
            other_charges=0,
            discount=0,
            fine_penalty=0,
            notes=booking_data.notes,
        )
        booking = await self._insert(booking, selected, "create_booking")
        logger.info(
            "Booking %s created for yacht %s, total %s", booking.id, yacht.id, total_price
        )
        return booking

    async def create_admin_booking(self, booking_data: AdminBookingCreate) -> Booking:
        """Back-office booking priced with ``compute_admin_total``."""
        yacht = await YachtService(self.db).get(booking_data.yacht_id)
        validate_date_range(booking_data.start_date, booking_data.end_date)

        rate_per_hour = booking_data.rate_per_hour
        if rate_per_hour is None:
            rate_per_hour = yacht.price_per_hour
        if rate_per_hour is None:
            logger.warning(
                "Data integrity: yacht id=%s (%s) has no price_per_hour, pricing it as 0",
                yacht.id,
                yacht.name,
            )
            rate_per_hour = 0

        total_price = compute_admin_total(
            rate_per_hour,
            booking_data.duration_value,
            other_charges=booking_data.other_charges,
            fine_penalty=booking_data.fine_penalty,
            discount=booking_data.discount,
            apply_vat=booking_data.apply_vat,
        )

        data = booking_data.model_dump(exclude={"rate_per_hour"})
        booking = Booking(
            **data,
            customer_name=f"{booking_data.first_name} {booking_data.last_name}".strip(),
            rate_per_hour=rate_per_hour,
            booking_source=BookingSource.DIRECT,
            total_price=total_price,
        )
        return await self._insert(booking, (), "create_admin_booking")

    async def update_status(self, booking_id: int, status: BookingStatus) -> Booking:
        booking = await self.get(booking_id)
        booking.status = status
        try:
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise BackendError.from_exception(exc, "update_booking_status") from exc

        change_feed.publish("bookings", "UPDATE")
        return await self.get(booking_id)

    async def delete(self, booking_id: int) -> bool:
        booking = await self.get(booking_id)
        await self.db.delete(booking)
        await self.db.commit()
        change_feed.publish("bookings", "DELETE")
        return True

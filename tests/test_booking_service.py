from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from charter.core.change_feed import change_feed
from charter.core.exceptions import (
    BackendError,
    BusinessRuleViolationError,
    ConflictError,
    EntityNotFoundError,
    FieldValidationError,
    ValidationError,
)
from charter.models import Booking, BookingOption, BookingSource, BookingStatus
from charter.schemas.booking import AdminBookingCreate, BookingDraftCreate
from charter.schemas.yacht import YachtOptionUpdate, YachtUpdate
from charter.services.booking_service import BookingService
from charter.services.yacht_service import YachtService


def draft_request(yacht_id, **overrides):
    values = {
        "yacht_id": yacht_id,
        "customer_name": "John Smith",
        "customer_email": "john.smith@charter.ae",
        "customer_phone": "+971501234567",
        "hours": 3,
        "selected_option_ids": [],
        "start_date": datetime(2025, 8, 1, 10, 0),
    }
    values.update(overrides)
    return BookingDraftCreate(**values)


async def count(db, model):
    result = await db.execute(select(func.count(model.id)))
    return result.scalar_one()


class TestCreateFromDraft:
    @pytest.mark.asyncio
    async def test_creates_pending_booking_with_option_snapshot(self, db, yacht):
        jet_ski = yacht.options[0]

        booking = await BookingService(db).create_from_draft(
            draft_request(yacht.id, selected_option_ids=[jet_ski.id])
        )

        assert booking.status == BookingStatus.PENDING
        assert booking.booking_source == BookingSource.DIRECT
        assert booking.total_price == Decimal("1700.00")
        assert booking.end_date == datetime(2025, 8, 1, 13, 0)
        assert [(o.option_name, o.option_price) for o in booking.options] == [
            ("Jet Ski", Decimal("200.00"))
        ]

    @pytest.mark.asyncio
    async def test_snapshot_survives_option_price_change(self, db, yacht):
        jet_ski = yacht.options[0]
        service = BookingService(db)
        booking = await service.create_from_draft(
            draft_request(yacht.id, selected_option_ids=[jet_ski.id])
        )

        await YachtService(db).update_option(jet_ski.id, YachtOptionUpdate(price=Decimal("999")))
        reloaded = await service.get(booking.id)

        assert reloaded.options[0].option_price == Decimal("200.00")
        assert reloaded.total_price == Decimal("1700.00")

    @pytest.mark.asyncio
    async def test_inactive_and_unknown_options_are_ignored(self, db, yacht):
        inactive = yacht.options[2]

        booking = await BookingService(db).create_from_draft(
            draft_request(yacht.id, selected_option_ids=[inactive.id, 9999])
        )

        assert booking.total_price == Decimal("1500.00")
        assert booking.options == []

    @pytest.mark.asyncio
    async def test_contact_details_are_trimmed(self, db, yacht):
        booking = await BookingService(db).create_from_draft(
            draft_request(yacht.id, customer_name="  John Smith  ")
        )
        assert booking.customer_name == "John Smith"

    @pytest.mark.asyncio
    async def test_invalid_draft_stores_nothing(self, db, yacht):
        with pytest.raises(FieldValidationError) as exc_info:
            await BookingService(db).create_from_draft(
                draft_request(yacht.id, customer_email="bad", hours=0), language="ar"
            )

        assert set(exc_info.value.field_errors) == {"customer_email", "hours"}
        assert exc_info.value.field_errors["hours"] == "الحد الأدنى 1 ساعة"
        assert await count(db, Booking) == 0

    @pytest.mark.asyncio
    async def test_unavailable_yacht(self, db, yacht):
        await YachtService(db).update(yacht.id, YachtUpdate(is_available=False))

        with pytest.raises(BusinessRuleViolationError) as exc_info:
            await BookingService(db).create_from_draft(draft_request(yacht.id))

        assert exc_info.value.rule_name == "yacht_unavailable"
        assert await count(db, Booking) == 0

    @pytest.mark.asyncio
    async def test_unknown_yacht(self, db):
        with pytest.raises(EntityNotFoundError):
            await BookingService(db).create_from_draft(draft_request(404))

    @pytest.mark.asyncio
    async def test_failed_option_insert_rolls_back_booking(self, db, yacht, monkeypatch):
        async def lose_connection(self, booking, options):
            raise OperationalError(
                "INSERT INTO booking_options", {}, Exception("connection reset")
            )

        monkeypatch.setattr(BookingService, "_snapshot_options", lose_connection)

        with pytest.raises(BackendError) as exc_info:
            await BookingService(db).create_from_draft(
                draft_request(yacht.id, selected_option_ids=[yacht.options[0].id])
            )

        assert exc_info.value.transient is True
        assert exc_info.value.operation == "create_booking"
        assert await count(db, Booking) == 0
        assert await count(db, BookingOption) == 0

    @pytest.mark.asyncio
    async def test_publishes_change(self, db, yacht):
        async with change_feed.subscribe(["bookings"]) as queue:
            await BookingService(db).create_from_draft(draft_request(yacht.id))
            event = queue.get_nowait()
        assert (event.table, event.event) == ("bookings", "INSERT")


class TestAdminBooking:
    def admin_request(self, yacht_id, **overrides):
        values = {
            "yacht_id": yacht_id,
            "first_name": "Sara",
            "last_name": "Khan",
            "customer_email": "sara.khan@charter.ae",
            "customer_phone": "+971502223344",
            "start_date": datetime(2025, 9, 5, 16, 0),
            "end_date": datetime(2025, 9, 5, 18, 0),
            "duration_value": Decimal("2"),
        }
        values.update(overrides)
        return AdminBookingCreate(**values)

    @pytest.mark.asyncio
    async def test_total_uses_yacht_rate_and_vat(self, db, yacht):
        booking = await BookingService(db).create_admin_booking(self.admin_request(yacht.id))

        assert booking.total_price == Decimal("1050.00")
        assert booking.rate_per_hour == Decimal("500.00")
        assert booking.customer_name == "Sara Khan"
        assert booking.status == BookingStatus.CONFIRMED

    @pytest.mark.asyncio
    async def test_manual_rate_and_adjustments(self, db, yacht):
        booking = await BookingService(db).create_admin_booking(
            self.admin_request(
                yacht.id,
                rate_per_hour=Decimal("450"),
                other_charges=Decimal("100"),
                discount=Decimal("200"),
                apply_vat=False,
            )
        )
        assert booking.total_price == Decimal("800.00")

    @pytest.mark.asyncio
    async def test_end_must_follow_start(self, db, yacht):
        with pytest.raises(ValidationError):
            await BookingService(db).create_admin_booking(
                self.admin_request(yacht.id, end_date=datetime(2025, 9, 5, 15, 0))
            )


class TestBookingAdministration:
    @pytest.mark.asyncio
    async def test_status_update_and_filter(self, db, yacht):
        service = BookingService(db)
        first = await service.create_from_draft(draft_request(yacht.id))
        await service.create_from_draft(draft_request(yacht.id))

        updated = await service.update_status(first.id, BookingStatus.CANCELLED)

        assert updated.status == BookingStatus.CANCELLED
        cancelled = await service.get_all(status=BookingStatus.CANCELLED)
        assert [booking.id for booking in cancelled] == [first.id]
        assert len(await service.get_all(yacht_id=yacht.id)) == 2

    @pytest.mark.asyncio
    async def test_stats_count_by_status_and_skip_cancelled_amounts(self, db, yacht):
        service = BookingService(db)
        first = await service.create_from_draft(draft_request(yacht.id))
        await service.create_from_draft(draft_request(yacht.id, hours=2))
        cancelled = await service.create_from_draft(draft_request(yacht.id, hours=1))
        await service.update_status(first.id, BookingStatus.CONFIRMED)
        await service.update_status(cancelled.id, BookingStatus.CANCELLED)

        stats = await service.get_stats()

        assert stats.total_yachts == 1
        assert stats.total_bookings == 3
        assert stats.pending_bookings == 1
        assert stats.by_status == {"pending": 1, "confirmed": 1, "cancelled": 1}
        assert stats.total_amount == Decimal("2500.00")

    @pytest.mark.asyncio
    async def test_stats_without_bookings(self, db, yacht):
        stats = await BookingService(db).get_stats()

        assert stats.total_bookings == 0
        assert stats.total_amount == Decimal("0.00")
        assert stats.by_status == {"pending": 0, "confirmed": 0, "cancelled": 0}

    @pytest.mark.asyncio
    async def test_delete(self, db, yacht):
        service = BookingService(db)
        booking = await service.create_from_draft(draft_request(yacht.id))

        await service.delete(booking.id)

        with pytest.raises(EntityNotFoundError):
            await service.get(booking.id)

    @pytest.mark.asyncio
    async def test_yacht_with_bookings_cannot_be_deleted(self, db, yacht):
        await BookingService(db).create_from_draft(draft_request(yacht.id))
        with pytest.raises(ConflictError):
            await YachtService(db).delete(yacht.id)

from decimal import Decimal
from urllib.parse import unquote

import pytest

from charter.core.booking_flow import BookingFlow, BookingStep
from charter.core.exceptions import BusinessRuleViolationError, FieldValidationError
from charter.core.i18n import message
from charter.models import Yacht, YachtOption


@pytest.fixture
def flow():
    yacht = Yacht(
        id=1, name="Azure Dream", price_per_hour=Decimal("500.00"), location="Dubai Marina"
    )
    options = [
        YachtOption(id=10, name="Jet Ski", price=Decimal("200.00")),
        YachtOption(id=11, name="Catering", price=Decimal("150.00")),
    ]
    return BookingFlow(yacht, options)


def fill(flow, **overrides):
    details = {
        "customer_name": "John Smith",
        "customer_email": "john.smith@charter.ae",
        "customer_phone": "+971501234567",
        "hours": 3,
    }
    details.update(overrides)
    flow.update_details(**details)


class TestDetailsStep:
    def test_starts_collecting_details(self, flow):
        assert flow.step == BookingStep.COLLECTING_DETAILS
        assert flow.draft.hours == 1

    def test_invalid_draft_stays_on_details(self, flow):
        fill(flow, customer_email="nope")
        assert flow.proceed() is False
        assert flow.step == BookingStep.COLLECTING_DETAILS
        assert flow.field_errors == {"customer_email": message("email_invalid")}

    def test_valid_draft_moves_to_confirmation(self, flow):
        fill(flow)
        assert flow.proceed() is True
        assert flow.step == BookingStep.COLLECTING_CONFIRMATION
        assert flow.field_errors == {}

    def test_total_tracks_hours_and_options(self, flow):
        fill(flow)
        flow.toggle_option(10)
        assert flow.total_price == Decimal("1700.00")
        flow.toggle_option(11)
        assert flow.total_price == Decimal("1850.00")

    def test_total_is_none_while_hours_invalid(self, flow):
        fill(flow, hours=0)
        assert flow.total_price is None

    def test_unknown_field_rejected(self, flow):
        with pytest.raises(ValueError):
            flow.update_details(total_price=1)


class TestTransitions:
    def test_back_keeps_the_draft(self, flow):
        fill(flow)
        flow.toggle_option(11)
        flow.proceed()
        flow.back()
        assert flow.step == BookingStep.COLLECTING_DETAILS
        assert flow.draft.customer_name == "John Smith"
        assert flow.draft.selected_option_ids == [11]

    def test_cannot_edit_during_confirmation(self, flow):
        fill(flow)
        flow.proceed()
        with pytest.raises(BusinessRuleViolationError):
            flow.update_details(hours=5)

    @pytest.mark.asyncio
    async def test_cannot_submit_from_details(self, flow):
        fill(flow)

        async def submitter(draft):
            return draft

        with pytest.raises(BusinessRuleViolationError):
            await flow.submit(submitter)

    def test_back_not_allowed_from_details(self, flow):
        with pytest.raises(BusinessRuleViolationError):
            flow.back()


class TestSubmit:
    @pytest.mark.asyncio
    async def test_success_clears_the_draft(self, flow):
        fill(flow, customer_name="  John Smith ")
        flow.proceed()
        received = []

        async def submitter(draft):
            received.append(draft)
            return {"id": 42}

        result = await flow.submit(submitter)

        assert result == {"id": 42}
        assert flow.step == BookingStep.SUBMITTED
        assert received[0].customer_name == "John Smith"
        assert flow.draft.customer_name == ""

    @pytest.mark.asyncio
    async def test_failure_keeps_draft_and_reports(self, flow):
        fill(flow)
        flow.proceed()
        calls = []

        async def submitter(draft):
            calls.append(draft)
            raise ConnectionError("connection reset by peer")

        result = await flow.submit(submitter)

        assert result is None
        assert len(calls) == 1
        assert flow.step == BookingStep.FAILED
        assert flow.error_message == message("booking_failed")
        assert "connection reset" not in flow.error_message
        assert flow.draft.customer_name == "John Smith"

    @pytest.mark.asyncio
    async def test_failed_flow_can_go_back_and_retry(self, flow):
        fill(flow)
        flow.proceed()

        async def failing(draft):
            raise RuntimeError("boom")

        async def succeeding(draft):
            return "ok"

        await flow.submit(failing)
        flow.back()
        assert flow.error_message is None
        flow.proceed()
        assert await flow.submit(succeeding) == "ok"


class TestWhatsAppFromFlow:
    def test_link_does_not_change_step(self, flow):
        fill(flow)
        flow.toggle_option(10)
        url = flow.whatsapp_url("+971 50 000 1111")
        assert url.startswith("https://wa.me/971500001111?text=")
        assert "Total Price: 1700.00 AED" in unquote(url)
        assert flow.step == BookingStep.COLLECTING_DETAILS

    def test_invalid_draft_gives_field_errors(self, flow):
        fill(flow, customer_phone="123")
        with pytest.raises(FieldValidationError) as exc_info:
            flow.whatsapp_url("971500001111")
        assert "customer_phone" in exc_info.value.field_errors

    def test_missing_number(self, flow):
        fill(flow)
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            flow.whatsapp_url("")
        assert exc_info.value.rule_name == "whatsapp_not_configured"

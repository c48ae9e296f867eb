from decimal import Decimal
from urllib.parse import unquote

import pytest

from charter.core.booking_draft import BookingDraft
from charter.core.exceptions import BusinessRuleViolationError
from charter.core.whatsapp import (
    FoodExtra,
    SelectedExtras,
    ServiceExtra,
    WaterSportExtra,
    build_service_inquiry_message,
    build_whatsapp_message,
    build_whatsapp_url,
    encode_uri_component,
    format_amount,
    normalize_whatsapp_number,
)
from charter.models import AdditionalService, FoodItem, WaterSport, Yacht, YachtOption


@pytest.fixture
def yacht():
    return Yacht(
        id=1, name="Azure Dream", price_per_hour=Decimal("500.00"), location="Dubai Marina"
    )


@pytest.fixture
def draft():
    return BookingDraft(
        customer_name="John Smith",
        customer_email="john.smith@charter.ae",
        customer_phone="+971501234567",
        hours=3,
        selected_option_ids=[10],
    )


class TestEncoding:
    def test_matches_uri_component_rules(self):
        assert encode_uri_component("Hi there!\n(ok)") == "Hi%20there!%0A(ok)"
        assert encode_uri_component("a:b/c&d") == "a%3Ab%2Fc%26d"

    def test_non_ascii_is_utf8_encoded(self):
        assert encode_uri_component("•") == "%E2%80%A2"
        assert unquote(encode_uri_component("محمد")) == "محمد"

    @pytest.mark.parametrize(
        "value, expected",
        [(Decimal("200.00"), "200"), (Decimal("199.5"), "199.50"), (None, "0"), (75, "75")],
    )
    def test_format_amount(self, value, expected):
        assert format_amount(value) == expected


class TestNumber:
    def test_number_is_reduced_to_digits(self):
        assert normalize_whatsapp_number("+971 (50) 123-4567") == "971501234567"

    @pytest.mark.parametrize("number", [None, "", "  ", "+"])
    def test_missing_number_is_rejected(self, number):
        with pytest.raises(BusinessRuleViolationError):
            normalize_whatsapp_number(number)

    def test_url(self):
        assert build_whatsapp_url("+971501234567", "Hello") == (
            "https://wa.me/971501234567?text=Hello"
        )


class TestBookingMessage:
    def test_message_content(self, yacht, draft):
        option = YachtOption(id=10, name="Jet Ski", price=Decimal("200.00"))

        encoded = build_whatsapp_message(draft, Decimal("1700"), [option], yacht=yacht)
        text = unquote(encoded)

        assert " " not in encoded
        assert "\n" not in encoded
        assert text.startswith('Hello! I want to book the yacht "Azure Dream"')
        assert "Customer: John Smith" in text
        assert "Email: john.smith@charter.ae" in text
        assert "Phone: +971501234567" in text
        assert "- Duration: 3 hours" in text
        assert "- Hourly Rate: 500 AED" in text
        assert "  • Jet Ski: 200 AED" in text
        assert "- Total Price: 1700.00 AED" in text
        assert "- Location: Dubai Marina" in text

    def test_no_options_section_when_nothing_selected(self, yacht, draft):
        text = unquote(build_whatsapp_message(draft, Decimal("1500"), [], yacht=yacht))
        assert "Selected Options" not in text

    def test_missing_location(self, draft):
        yacht = Yacht(id=2, name="Sea Breeze", price_per_hour=Decimal("300"))
        text = unquote(build_whatsapp_message(draft, Decimal("900"), [], yacht=yacht))
        assert "- Location: Not specified" in text

    def test_extras_are_listed(self, yacht, draft):
        extras = SelectedExtras(
            water_sports=[WaterSportExtra("Flyboard", 30, Decimal("350"))],
            food=[FoodExtra("BBQ Platter", 4, Decimal("85"))],
            additional_services=[ServiceExtra("Photographer", Decimal("400"))],
        )

        text = unquote(build_whatsapp_message(draft, Decimal("1500"), [], extras, yacht=yacht))

        assert "Selected Extras:" in text
        assert "  • Flyboard - 30 min: 350 AED" in text
        assert "  • BBQ Platter x 4: 85 AED/person" in text
        assert "  • Photographer: 400 AED" in text


class TestServiceInquiry:
    def test_water_sport(self):
        item = WaterSport(
            id=1, name="Flyboard", pax=2, price_30min=Decimal("350"), price_60min=Decimal("600")
        )
        text = unquote(build_service_inquiry_message(item))
        assert "Activity: Flyboard" in text
        assert "Pax: up to 2" in text
        assert "30 min = 350 AED, 60 min = 600 AED" in text

    def test_additional_service(self):
        item = AdditionalService(id=1, name="Photographer", price=Decimal("400"))
        assert "Price: 400 AED" in unquote(build_service_inquiry_message(item))

    def test_food(self):
        item = FoodItem(id=1, name="BBQ Platter", price_per_person=Decimal("85"))
        assert "85 AED/person" in unquote(build_service_inquiry_message(item))

    def test_yacht_has_no_inquiry_message(self, yacht):
        with pytest.raises(ValueError):
            build_service_inquiry_message(yacht)

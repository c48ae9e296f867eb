import pytest

from charter.core.booking_draft import BookingDraft, parse_hours_input, validate_booking_draft
from charter.core.i18n import message


def make_draft(**overrides):
    values = {
        "customer_name": "John Smith",
        "customer_email": "john.smith@charter.ae",
        "customer_phone": "+971 50 123 4567",
        "hours": 3,
    }
    values.update(overrides)
    return BookingDraft(**values)


class TestValidateBookingDraft:
    def test_valid_draft(self):
        result = validate_booking_draft(make_draft())
        assert result.valid
        assert result.field_errors == {}

    def test_arabic_name_is_accepted(self):
        assert validate_booking_draft(make_draft(customer_name="محمد العلي")).valid

    def test_surrounding_whitespace_is_ignored(self):
        draft = make_draft(customer_name="  John Smith  ", customer_email=" john@charter.ae ")
        assert validate_booking_draft(draft).valid

    @pytest.mark.parametrize(
        "name, key",
        [
            ("", "name_required"),
            ("   ", "name_required"),
            ("J", "name_too_short"),
            ("J" * 101, "name_too_long"),
            ("John 3rd", "name_invalid"),
        ],
    )
    def test_name_rules(self, name, key):
        result = validate_booking_draft(make_draft(customer_name=name))
        assert result.field_errors == {"customer_name": message(key)}

    def test_email_rules(self):
        result = validate_booking_draft(make_draft(customer_email="not-an-email"))
        assert result.field_errors == {"customer_email": message("email_invalid")}

    @pytest.mark.parametrize(
        "phone, key",
        [
            ("12345", "phone_too_short"),
            ("+971 50 123 4567 890 12", "phone_too_long"),
            ("+971-50-ABC-4567", "phone_invalid"),
        ],
    )
    def test_phone_rules(self, phone, key):
        result = validate_booking_draft(make_draft(customer_phone=phone))
        assert result.field_errors == {"customer_phone": message(key)}

    @pytest.mark.parametrize(
        "hours, expected",
        [
            (0, "Minimum 1 hour"),
            (73, "Maximum 72 hours"),
            (2.5, "Hours must be a whole number"),
        ],
    )
    def test_hours_rules(self, hours, expected):
        result = validate_booking_draft(make_draft(hours=hours))
        assert result.field_errors == {"hours": expected}

    def test_one_message_per_field(self):
        draft = BookingDraft(customer_name="", customer_email="", customer_phone="", hours=0)
        result = validate_booking_draft(draft)
        assert not result.valid
        assert set(result.field_errors) == {
            "customer_name",
            "customer_email",
            "customer_phone",
            "hours",
        }
        assert all(isinstance(error, str) for error in result.field_errors.values())

    def test_messages_follow_language(self):
        result = validate_booking_draft(make_draft(customer_name=""), language="ar")
        assert result.field_errors["customer_name"] == "الاسم مطلوب"


class TestParseHoursInput:
    @pytest.mark.parametrize(
        "raw, expected",
        [("", 0), (None, 0), ("abc", 0), ("3h", 3), (" 12 ", 12), ("4.5", 4), (6, 6)],
    )
    def test_parse(self, raw, expected):
        assert parse_hours_input(raw) == expected

    def test_empty_input_fails_validation_instead_of_defaulting(self):
        draft = make_draft(hours=parse_hours_input(""))
        assert "hours" in validate_booking_draft(draft).field_errors


def test_toggle_option():
    draft = make_draft()
    draft.toggle_option(5)
    draft.toggle_option(8)
    draft.toggle_option(5)
    assert draft.selected_option_ids == [8]

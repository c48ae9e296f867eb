"""
Booking drafts and their validation.

A draft lives only on the client until it is submitted whole. Validation reports
at most one message per field, in the visitor's language, and never touches the
database.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List

from email_validator import EmailNotValidError, validate_email

from charter.core.config import settings
from charter.core.i18n import message

NAME_PATTERN = re.compile(r"^[a-zA-Z\u0600-\u06FF\s'-]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9\s()-]{8,20}$")
LEADING_INTEGER = re.compile(r"^[+-]?\d+")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
PHONE_MIN_LENGTH = 8
PHONE_MAX_LENGTH = 20


@dataclass
class BookingDraft:
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    hours: Any = 1
    selected_option_ids: List[int] = field(default_factory=list)

    def toggle_option(self, option_id: int) -> None:
        if option_id in self.selected_option_ids:
            self.selected_option_ids.remove(option_id)
        else:
            self.selected_option_ids.append(option_id)

    def cleaned(self) -> "BookingDraft":
        """Copy with surrounding whitespace removed from the contact fields."""
        return replace(
            self,
            customer_name=(self.customer_name or "").strip(),
            customer_email=(self.customer_email or "").strip(),
            customer_phone=(self.customer_phone or "").strip(),
            selected_option_ids=list(self.selected_option_ids),
        )


@dataclass
class DraftValidation:
    valid: bool
    field_errors: Dict[str, str] = field(default_factory=dict)


def parse_hours_input(raw: Any) -> int:
    """
    Read the hours text input the way the booking form does.

    Leading digits are used ("3h" -> 3); an empty or non-numeric input becomes 0,
    which then fails validation instead of silently turning into 1.
    """
    if raw is None:
        return 0
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    match = LEADING_INTEGER.match(str(raw).strip())
    return int(match.group()) if match else 0


def _name_error(name: str, language: str):
    if not name:
        return message("name_required", language)
    if len(name) < NAME_MIN_LENGTH:
        return message("name_too_short", language)
    if len(name) > NAME_MAX_LENGTH:
        return message("name_too_long", language)
    if not NAME_PATTERN.match(name):
        return message("name_invalid", language)
    return None


def _email_error(email: str, language: str):
    if len(email) > EMAIL_MAX_LENGTH:
        return message("email_too_long", language)
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return message("email_invalid", language)
    return None


def _phone_error(phone: str, language: str):
    if len(phone) < PHONE_MIN_LENGTH:
        return message("phone_too_short", language)
    if len(phone) > PHONE_MAX_LENGTH:
        return message("phone_too_long", language)
    if not PHONE_PATTERN.match(phone):
        return message("phone_invalid", language)
    return None


def _hours_error(hours: Any, language: str):
    if isinstance(hours, bool) or not isinstance(hours, int):
        return message("hours_whole", language)
    if hours < settings.MIN_BOOKING_HOURS:
        return message("hours_min", language, min=settings.MIN_BOOKING_HOURS)
    if hours > settings.MAX_BOOKING_HOURS:
        return message("hours_max", language, max=settings.MAX_BOOKING_HOURS)
    return None


def validate_booking_draft(draft: BookingDraft, language: str = "en") -> DraftValidation:
    draft = draft.cleaned()
    checks = {
        "customer_name": _name_error(draft.customer_name, language),
        "customer_email": _email_error(draft.customer_email, language),
        "customer_phone": _phone_error(draft.customer_phone, language),
        "hours": _hours_error(draft.hours, language),
    }
    field_errors = {name: error for name, error in checks.items() if error}
    return DraftValidation(valid=not field_errors, field_errors=field_errors)

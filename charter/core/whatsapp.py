"""
WhatsApp deep links.

Booking by WhatsApp skips persistence entirely: the draft is turned into a
pre-filled ``wa.me`` link and a human confirms the rest in the chat.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Optional, Sequence
from urllib.parse import quote

from charter.core.booking_draft import BookingDraft
from charter.core.config import settings
from charter.core.exceptions import BusinessRuleViolationError
from charter.core.i18n import message, pick
from charter.core.pricing import to_decimal
from charter.models.base import CatalogKind

# Characters encodeURIComponent leaves alone besides the ones quote() always keeps
_URI_COMPONENT_SAFE = "!*'()"


@dataclass
class WaterSportExtra:
    name: str
    duration: int  # 30 or 60 minutes
    price: Optional[Decimal] = None


@dataclass
class FoodExtra:
    name: str
    quantity: int
    price_per_person: Optional[Decimal] = None


@dataclass
class ServiceExtra:
    name: str
    price: Optional[Decimal] = None


@dataclass
class SelectedExtras:
    water_sports: List[WaterSportExtra] = field(default_factory=list)
    food: List[FoodExtra] = field(default_factory=list)
    additional_services: List[ServiceExtra] = field(default_factory=list)

    def lines(self, currency: str) -> List[str]:
        lines = []
        if self.water_sports:
            lines.append("Water Sports:")
            for extra in self.water_sports:
                length = "30 min" if extra.duration == 30 else "1 hour"
                lines.append(f"  • {extra.name} - {length}{_price_suffix(extra.price, currency)}")
        if self.food:
            lines.append("Food:")
            for extra in self.food:
                suffix = ""
                if extra.price_per_person is not None:
                    suffix = f": {format_amount(extra.price_per_person)} {currency}/person"
                lines.append(f"  • {extra.name} x {extra.quantity}{suffix}")
        if self.additional_services:
            lines.append("Additional Services:")
            for extra in self.additional_services:
                lines.append(f"  • {extra.name}{_price_suffix(extra.price, currency)}")
        return lines


def format_amount(value: Any) -> str:
    """200 -> "200", 199.5 -> "199.50"."""
    amount = to_decimal(value)
    if amount == amount.to_integral_value():
        return str(amount.to_integral_value())
    return f"{amount:.2f}"


def _price_suffix(price, currency: str) -> str:
    if price is None:
        return ""
    return f": {format_amount(price)} {currency}"


def encode_uri_component(text: str) -> str:
    return quote(text, safe=_URI_COMPONENT_SAFE)


def normalize_whatsapp_number(number: Optional[str]) -> str:
    """wa.me wants the international number as bare digits."""
    digits = re.sub(r"\D", "", number or "")
    if not digits:
        raise BusinessRuleViolationError(
            "whatsapp_not_configured", message("whatsapp_not_configured")
        )
    return digits


def build_whatsapp_message(
    draft: BookingDraft,
    total_price: Decimal,
    selected_options: Sequence[Any],
    extras: Optional[SelectedExtras] = None,
    yacht: Any = None,
    language: str = "en",
) -> str:
    """Booking request text for the chat, URL-encoded."""
    draft = draft.cleaned()
    currency = settings.CURRENCY
    yacht_name = getattr(yacht, "name", "") if yacht is not None else ""
    hourly_rate = getattr(yacht, "price_per_hour", None) if yacht is not None else None
    location = (getattr(yacht, "location", None) if yacht is not None else None) or pick(
        "غير محدد", "Not specified", language
    )

    option_lines = [
        f"  • {option.name}: {format_amount(option.price)} {currency}"
        for option in selected_options
    ]
    extra_lines = extras.lines(currency) if extras else []

    text = (
        f'Hello! I want to book the yacht "{yacht_name}"\n\n'
        f"Customer: {draft.customer_name}\n"
        f"Email: {draft.customer_email}\n"
        f"Phone: {draft.customer_phone}\n\n"
        f"Rental Details:\n"
        f"- Duration: {draft.hours} {message('hours_unit', language)}\n"
        f"- Hourly Rate: {format_amount(hourly_rate)} {currency}\n"
    )
    if option_lines:
        text += "\nSelected Options:\n" + "\n".join(option_lines) + "\n"
    if extra_lines:
        text += "\nSelected Extras:\n" + "\n".join(extra_lines) + "\n"
    text += (
        f"- Total Price: {to_decimal(total_price):.2f} {currency}\n"
        f"- Location: {location}\n\n"
        f"Please confirm availability and payment details."
    )
    return encode_uri_component(text)


def build_service_inquiry_message(item: Any) -> str:
    """Inquiry text for a single water sport or additional service, URL-encoded."""
    currency = settings.CURRENCY
    kind = item.catalog_kind
    if kind == CatalogKind.WATER_SPORT:
        text = (
            "Hello! I'd like to book a water sport.\n\n"
            f"Activity: {item.name}\n"
            f"Pax: up to {item.pax}\n"
            f"Prices: 30 min = {format_amount(item.price_30min)} {currency}, "
            f"60 min = {format_amount(item.price_60min)} {currency}\n\n"
            "Please advise availability and next steps."
        )
    elif kind == CatalogKind.ADDITIONAL_SERVICE:
        text = (
            "Hello! I'm interested in an additional service.\n\n"
            f"Service: {item.name}\n"
            f"Price: {format_amount(item.price)} {currency}\n\n"
            "Please advise availability and next steps."
        )
    elif kind == CatalogKind.FOOD:
        text = (
            "Hello! I'd like to order food for my trip.\n\n"
            f"Item: {item.name}\n"
            f"Price: {format_amount(item.price_per_person)} {currency}/person\n\n"
            "Please advise availability and next steps."
        )
    else:
        raise ValueError(f"No inquiry message for {kind.value}")
    return encode_uri_component(text)


def build_whatsapp_url(whatsapp_number: Optional[str], encoded_message: str) -> str:
    number = normalize_whatsapp_number(whatsapp_number)
    return f"{settings.WHATSAPP_BASE_URL}/{number}?text={encoded_message}"

"""
Price computation for catalog items.

Every surface that shows or stores a price goes through this module: the public
booking flow, the shopping list, yacht quotes, the services cart and the admin
booking form. Promotions are looked up separately (see ``charter.core.promotions``)
and are never subtracted from the totals computed here.
"""

import logging
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, List, Optional, Sequence

from charter.core.config import settings
from charter.core.exceptions import ValidationError
from charter.core.promotions import find_applicable_promotion, promotional_price_preview
from charter.models.base import CatalogKind
from charter.models.booking import DurationType

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")

# Water sports are sold in fixed buckets only
WATER_SPORT_PRICE_FIELDS = {30: "price_30min", 60: "price_60min"}


@dataclass
class PriceQuote:
    """Price of one catalog item for a given duration or quantity."""

    unit_price: Decimal
    options_total: Decimal
    total_price: Decimal
    promotion: Optional[Any] = None
    # Display only, never persisted
    promotional_price: Optional[Decimal] = None


def to_decimal(value: Any) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def catalog_kind_of(item: Any) -> CatalogKind:
    kind = getattr(item, "catalog_kind", None)
    if not isinstance(kind, CatalogKind):
        raise TypeError(f"{type(item).__name__} is not a catalog item")
    return kind


def _base_price(item: Any, field_name: str) -> Decimal:
    value = getattr(item, field_name, None)
    if value is None:
        logger.warning(
            "Data integrity: %s id=%s (%s) has no %s, pricing it as 0",
            catalog_kind_of(item).value,
            getattr(item, "id", None),
            getattr(item, "name", None),
            field_name,
        )
        return ZERO
    return to_decimal(value)


def _is_whole(value: Any) -> bool:
    # NaN and infinity are neither
    if isinstance(value, float):
        return math.isfinite(value) and value.is_integer()
    if isinstance(value, Decimal):
        return value.is_finite() and value == value.to_integral_value()
    return False


def _whole_number(value: Any, field_name: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if _is_whole(value):
        return int(value)
    raise ValidationError(
        f"{field_name} must be a whole number",
        field_name,
        str(value),
        key="hours_whole" if field_name == "hours" else "whole_number",
    )


def _positive_whole_number(value: Any, field_name: str) -> int:
    number = _whole_number(value, field_name)
    if number <= 0:
        raise ValidationError(
            f"{field_name} must be greater than 0",
            field_name,
            str(value),
            key="positive_number",
        )
    return number


def validate_hours(hours: Any) -> int:
    """Return ``hours`` as an int, rejecting values outside the bookable range."""
    hours = _whole_number(hours, "hours")
    if hours < settings.MIN_BOOKING_HOURS:
        raise ValidationError(
            f"hours must be at least {settings.MIN_BOOKING_HOURS}",
            "hours",
            str(hours),
            key="hours_min",
            params={"min": settings.MIN_BOOKING_HOURS},
        )
    if hours > settings.MAX_BOOKING_HOURS:
        raise ValidationError(
            f"hours must be at most {settings.MAX_BOOKING_HOURS}",
            "hours",
            str(hours),
            key="hours_max",
            params={"max": settings.MAX_BOOKING_HOURS},
        )
    return hours


def resolve_unit_price(
    item: Any, quantity: Any, duration_type: DurationType = DurationType.HOURLY
) -> Decimal:
    """
    Base price of a catalog item before options and promotions.

    ``quantity`` means hours (or days) for yachts, minutes for water sports and
    persons for food. Additional services have a flat price and ignore it.

    Raises:
        ValidationError: if ``quantity`` is outside what the item can be sold for
    """
    kind = catalog_kind_of(item)

    if kind == CatalogKind.YACHT:
        if duration_type == DurationType.DAILY:
            days = _positive_whole_number(quantity, "days")
            return days * _base_price(item, "price_per_day")
        hours = validate_hours(quantity)
        return hours * _base_price(item, "price_per_hour")

    if kind == CatalogKind.WATER_SPORT:
        minutes = _whole_number(quantity, "duration")
        field_name = WATER_SPORT_PRICE_FIELDS.get(minutes)
        if field_name is None:
            raise ValidationError(
                "Water sport duration must be 30 or 60 minutes",
                "duration",
                str(quantity),
                key="water_sport_duration",
            )
        return _base_price(item, field_name)

    if kind == CatalogKind.FOOD:
        persons = _positive_whole_number(quantity, "quantity")
        return persons * _base_price(item, "price_per_person")

    return _base_price(item, "price")


def select_options(
    selected_option_ids: Iterable[Any], available_options: Sequence[Any]
) -> List[Any]:
    """
    Resolve selected option ids against the options on offer, in selection order.

    Ids that are not on offer (removed or deactivated since the page loaded) are
    skipped and logged. Repeated ids count once.
    """
    by_id = {option.id: option for option in available_options}
    selected = []
    seen = set()
    for option_id in selected_option_ids:
        if option_id in seen:
            continue
        seen.add(option_id)
        option = by_id.get(option_id)
        if option is None:
            logger.warning(
                "Selected option %s is not available any more, contributing 0",
                option_id,
            )
            continue
        selected.append(option)
    return selected


def aggregate_options(
    selected_option_ids: Iterable[Any], available_options: Sequence[Any]
) -> Decimal:
    selected = select_options(selected_option_ids, available_options)
    return sum((to_decimal(option.price) for option in selected), ZERO)


def compute_total_price(
    item: Any,
    duration_or_quantity: Any,
    selected_option_ids: Iterable[Any] = (),
    available_options: Sequence[Any] = (),
    duration_type: DurationType = DurationType.HOURLY,
) -> Decimal:
    """Total written to ``Booking.total_price``: unit price plus options, no discount."""
    unit_price = resolve_unit_price(item, duration_or_quantity, duration_type)
    options_total = aggregate_options(selected_option_ids, available_options)
    return round_money(unit_price + options_total)


def preview_total_price(
    item: Any,
    duration_or_quantity: Any,
    selected_option_ids: Iterable[Any] = (),
    available_options: Sequence[Any] = (),
    duration_type: DurationType = DurationType.HOURLY,
) -> Optional[Decimal]:
    """Like ``compute_total_price`` but returns None while the input is still invalid."""
    try:
        return compute_total_price(
            item, duration_or_quantity, selected_option_ids, available_options, duration_type
        )
    except ValidationError:
        return None


def quote(
    item: Any,
    duration_or_quantity: Any,
    selected_option_ids: Iterable[Any] = (),
    available_options: Sequence[Any] = (),
    promotions: Sequence[Any] = (),
    duration_type: DurationType = DurationType.HOURLY,
    now=None,
) -> PriceQuote:
    selected_option_ids = list(selected_option_ids)
    unit_price = round_money(resolve_unit_price(item, duration_or_quantity, duration_type))
    options_total = round_money(aggregate_options(selected_option_ids, available_options))
    total_price = round_money(unit_price + options_total)

    promotion = find_applicable_promotion(promotions, item, now=now)
    promotional_price = None
    if promotion is not None:
        promotional_price = promotional_price_preview(total_price, promotion)

    return PriceQuote(
        unit_price=unit_price,
        options_total=options_total,
        total_price=total_price,
        promotion=promotion,
        promotional_price=promotional_price,
    )


def compute_admin_total(
    rate_per_hour: Any,
    duration: Any,
    other_charges: Any = ZERO,
    fine_penalty: Any = ZERO,
    discount: Any = ZERO,
    apply_vat: bool = True,
    vat_rate: Optional[Decimal] = None,
) -> Decimal:
    """
    Total for a booking entered through the back-office form.

    ``(rate * duration + other_charges + fine_penalty - discount)``, plus VAT when
    ``apply_vat`` is set. ``discount`` is the admin's manual discount, not a promotion.
    """
    subtotal = (
        to_decimal(rate_per_hour) * to_decimal(duration)
        + to_decimal(other_charges)
        + to_decimal(fine_penalty)
        - to_decimal(discount)
    )
    if apply_vat:
        rate = settings.VAT_RATE if vat_rate is None else to_decimal(vat_rate)
        subtotal = subtotal * (1 + rate)
    return round_money(subtotal)

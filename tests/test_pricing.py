import logging
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from charter.core.exceptions import ValidationError
from charter.core.pricing import (
    aggregate_options,
    compute_admin_total,
    compute_total_price,
    preview_total_price,
    quote,
    resolve_unit_price,
)
from charter.models import (
    AdditionalService,
    BookingStatus,
    DurationType,
    FoodItem,
    Promotion,
    PromotionCatalog,
    WaterSport,
    Yacht,
    YachtOption,
)


@pytest.fixture
def yacht():
    return Yacht(
        id=1,
        name="Azure Dream",
        price_per_hour=Decimal("500.00"),
        price_per_day=Decimal("3500.00"),
    )


@pytest.fixture
def options():
    return [
        YachtOption(id=10, name="Jet Ski", price=Decimal("200.00")),
        YachtOption(id=11, name="Catering", price=Decimal("150.00")),
    ]


class TestYachtPricing:
    def test_total_is_hours_times_rate_plus_options(self, yacht, options):
        total = compute_total_price(yacht, 3, [10, 11], options)
        assert total == Decimal("1850.00")

    def test_no_options_selected(self, yacht, options):
        assert compute_total_price(yacht, 2, [], options) == Decimal("1000.00")

    def test_option_is_flat_not_multiplied_by_hours(self, yacht, options):
        assert compute_total_price(yacht, 5, [10], options) == Decimal("2700.00")

    @pytest.mark.parametrize("hours", [0, 73, -1])
    def test_hours_outside_bookable_range_rejected(self, yacht, hours):
        with pytest.raises(ValidationError) as exc_info:
            compute_total_price(yacht, hours)
        assert exc_info.value.field == "hours"

    def test_fractional_hours_rejected(self, yacht):
        with pytest.raises(ValidationError):
            resolve_unit_price(yacht, 2.5)

    @pytest.mark.parametrize(
        "hours", [float("nan"), float("inf"), Decimal("NaN"), Decimal("-Infinity")]
    )
    def test_non_finite_hours_rejected(self, yacht, hours):
        with pytest.raises(ValidationError) as exc_info:
            compute_total_price(yacht, hours)
        assert exc_info.value.key == "hours_whole"

    def test_whole_float_and_decimal_hours_accepted(self, yacht):
        assert compute_total_price(yacht, 2.0) == Decimal("1000.00")
        assert compute_total_price(yacht, Decimal("2")) == Decimal("1000.00")

    def test_range_errors_carry_bound(self, yacht):
        with pytest.raises(ValidationError) as exc_info:
            compute_total_price(yacht, 0)
        assert exc_info.value.key == "hours_min"
        assert exc_info.value.params == {"min": 1}

        with pytest.raises(ValidationError) as exc_info:
            compute_total_price(yacht, 73)
        assert exc_info.value.key == "hours_max"
        assert exc_info.value.params == {"max": 72}

    def test_boundaries_are_bookable(self, yacht):
        assert compute_total_price(yacht, 1) == Decimal("500.00")
        assert compute_total_price(yacht, 72) == Decimal("36000.00")

    def test_daily_rate(self, yacht):
        assert resolve_unit_price(yacht, 2, DurationType.DAILY) == Decimal("7000.00")

    def test_missing_hourly_price_counts_as_zero_and_is_logged(self, options, caplog):
        yacht = Yacht(id=2, name="Unpriced", price_per_hour=None)
        with caplog.at_level(logging.WARNING, logger="charter.core.pricing"):
            total = compute_total_price(yacht, 3, [10], options)
        assert total == Decimal("200.00")
        assert "Data integrity" in caplog.text

    def test_preview_is_none_for_invalid_hours(self, yacht):
        assert preview_total_price(yacht, 0) is None
        assert preview_total_price(yacht, 4) == Decimal("2000.00")


class TestOptionAggregation:
    def test_stale_option_contributes_nothing(self, options, caplog):
        with caplog.at_level(logging.WARNING, logger="charter.core.pricing"):
            total = aggregate_options([10, 999], options)
        assert total == Decimal("200.00")
        assert "999" in caplog.text

    def test_repeated_ids_count_once(self, options):
        assert aggregate_options([11, 11, 11], options) == Decimal("150.00")

    def test_nothing_selected(self, options):
        assert aggregate_options([], options) == Decimal("0")


class TestServicePricing:
    def test_water_sport_buckets(self):
        flyboard = WaterSport(
            id=1, name="Flyboard", price_30min=Decimal("350"), price_60min=Decimal("600")
        )
        assert resolve_unit_price(flyboard, 30) == Decimal("350")
        assert resolve_unit_price(flyboard, 60) == Decimal("600")

    def test_water_sport_other_durations_rejected(self):
        flyboard = WaterSport(id=1, name="Flyboard", price_30min=Decimal("350"))
        with pytest.raises(ValidationError) as exc_info:
            resolve_unit_price(flyboard, 45)
        assert exc_info.value.field == "duration"

    def test_food_is_priced_per_person(self):
        platter = FoodItem(id=1, name="BBQ Platter", price_per_person=Decimal("85.00"))
        assert resolve_unit_price(platter, 4) == Decimal("340.00")

    def test_food_needs_at_least_one_person(self):
        platter = FoodItem(id=1, name="BBQ Platter", price_per_person=Decimal("85.00"))
        with pytest.raises(ValidationError):
            resolve_unit_price(platter, 0)

    def test_additional_service_is_flat(self):
        photographer = AdditionalService(id=1, name="Photographer", price=Decimal("400"))
        assert resolve_unit_price(photographer, 1) == Decimal("400")

    def test_non_catalog_object_rejected(self):
        with pytest.raises(TypeError):
            resolve_unit_price(BookingStatus.PENDING, 1)


class TestQuote:
    def test_promotion_never_reduces_total(self, yacht, options):
        promotion = Promotion(
            id=1,
            title="Summer",
            catalog=PromotionCatalog.YACHTS,
            discount_percentage=Decimal("20"),
            is_active=True,
        )
        now = datetime(2025, 7, 1, tzinfo=timezone.utc)

        price_quote = quote(yacht, 3, [10], options, [promotion], now=now)

        assert price_quote.total_price == Decimal("1700.00")
        assert price_quote.total_price == compute_total_price(yacht, 3, [10], options)
        assert price_quote.promotion is promotion
        assert price_quote.promotional_price == Decimal("1360.00")

    def test_quote_without_promotion(self, yacht, options):
        price_quote = quote(yacht, 2, [11], options)
        assert price_quote.unit_price == Decimal("1000.00")
        assert price_quote.options_total == Decimal("150.00")
        assert price_quote.promotion is None
        assert price_quote.promotional_price is None


class TestAdminTotal:
    def test_vat_is_added(self):
        assert compute_admin_total(500, 2, apply_vat=True) == Decimal("1050.00")

    def test_charges_penalty_and_discount(self):
        total = compute_admin_total(
            "450", 3, other_charges="100", fine_penalty="50", discount="200", apply_vat=False
        )
        assert total == Decimal("1300.00")

    def test_custom_vat_rate(self):
        assert compute_admin_total(100, 1, vat_rate=Decimal("0.10")) == Decimal("110.00")

    def test_rounding_half_up(self):
        assert compute_admin_total("333.33", 1, apply_vat=True) == Decimal("350.00")

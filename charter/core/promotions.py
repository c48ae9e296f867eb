"""
Promotion eligibility.

A promotion is informational: it drives badges and strike-through prices but is
never subtracted from a stored total.

When several promotions cover the same item the winner is picked deterministically:
item-specific beats catalog-wide, then the higher discount percentage, then the
higher discount amount, then the lower id.
"""

from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, List, Optional, Sequence

from charter.models.base import CatalogKind
from charter.models.promotion import PromotionCatalog

CATALOG_BY_KIND = {
    CatalogKind.YACHT: PromotionCatalog.YACHTS,
    CatalogKind.WATER_SPORT: PromotionCatalog.SERVICES,
    CatalogKind.FOOD: PromotionCatalog.SERVICES,
    CatalogKind.ADDITIONAL_SERVICE: PromotionCatalog.SERVICES,
}


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _not_after(bound, now: datetime) -> bool:
    """``bound <= now``; a bare date is compared by calendar day."""
    if isinstance(bound, datetime):
        return _utc(bound) <= now
    if isinstance(bound, date):
        return bound <= now.date()
    raise TypeError(f"Unsupported promotion boundary: {bound!r}")


def _not_before(bound, now: datetime) -> bool:
    if isinstance(bound, datetime):
        return _utc(bound) >= now
    if isinstance(bound, date):
        return bound >= now.date()
    raise TypeError(f"Unsupported promotion boundary: {bound!r}")


def _as_enum(value, enum_class):
    if value is None or isinstance(value, enum_class):
        return value
    return enum_class(value)


def is_promotion_active(promotion: Any, now: Optional[datetime] = None) -> bool:
    """Active flag set and ``now`` inside the inclusive validity window."""
    if not promotion.is_active:
        return False
    now = _utc(now or datetime.now(timezone.utc))
    if promotion.valid_from is not None and not _not_after(promotion.valid_from, now):
        return False
    if promotion.valid_until is not None and not _not_before(promotion.valid_until, now):
        return False
    return True


def promotion_applies_to(promotion: Any, item: Any) -> bool:
    """Scope check only: same catalog, and either catalog-wide or aimed at this item."""
    kind = item.catalog_kind
    if _as_enum(promotion.catalog, PromotionCatalog) != CATALOG_BY_KIND[kind]:
        return False
    if promotion.item_id is None:
        return True
    item_kind = _as_enum(promotion.item_kind, CatalogKind) or CatalogKind.YACHT
    return item_kind == kind and promotion.item_id == item.id


def _precedence(indexed):
    index, promotion = indexed
    percentage = Decimal(str(promotion.discount_percentage or 0))
    amount = Decimal(str(promotion.discount_amount or 0))
    promotion_id = promotion.id if promotion.id is not None else float("inf")
    return (promotion.item_id is None, -percentage, -amount, promotion_id, index)


def applicable_promotions(
    promotions: Sequence[Any], item: Any, now: Optional[datetime] = None
) -> List[Any]:
    """Currently active promotions covering ``item``, best first."""
    candidates = [
        (index, promotion)
        for index, promotion in enumerate(promotions)
        if is_promotion_active(promotion, now) and promotion_applies_to(promotion, item)
    ]
    return [promotion for _, promotion in sorted(candidates, key=_precedence)]


def find_applicable_promotion(
    promotions: Sequence[Any], item: Any, now: Optional[datetime] = None
) -> Optional[Any]:
    matches = applicable_promotions(promotions, item, now)
    return matches[0] if matches else None


def promotional_price_preview(total: Decimal, promotion: Any) -> Decimal:
    """Discounted figure shown next to the real total. Never store this."""
    if promotion.discount_percentage:
        percentage = Decimal(str(promotion.discount_percentage))
        discounted = total * (Decimal("100") - percentage) / Decimal("100")
    elif promotion.discount_amount:
        discounted = max(total - Decimal(str(promotion.discount_amount)), Decimal("0"))
    else:
        discounted = total
    return discounted.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

"""
Quotes and WhatsApp links built from live catalog rows.

Nothing is cached: every call reads the current yacht, options and promotions, so
an admin edit shows up in the next quote.
"""

from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from charter.core.booking_draft import BookingDraft, validate_booking_draft
from charter.core.config import settings
from charter.core.exceptions import BusinessRuleViolationError, FieldValidationError
from charter.core.i18n import message
from charter.core.pricing import compute_total_price, quote, resolve_unit_price, select_options
from charter.core.whatsapp import (
    FoodExtra,
    SelectedExtras,
    ServiceExtra,
    WaterSportExtra,
    build_service_inquiry_message,
    build_whatsapp_message,
    build_whatsapp_url,
)
from charter.schemas.pricing import (
    ExtrasRequest,
    ServiceInquiryRequest,
    ServiceQuoteRequest,
    WhatsAppLinkRequest,
    YachtQuoteRequest,
)
from charter.schemas.promotion import Promotion
from charter.services.promotion_service import PromotionService
from charter.services.service_catalog_service import (
    AdditionalServiceService,
    FoodItemService,
    WaterSportService,
    load_catalog_item,
    require_service_kind,
)
from charter.services.settings_service import SettingsService
from charter.services.yacht_service import YachtService


def _quote_response(price_quote) -> Dict[str, Any]:
    return {
        "unit_price": price_quote.unit_price,
        "options_total": price_quote.options_total,
        "total_price": price_quote.total_price,
        "currency": settings.CURRENCY,
        "promotion": (
            Promotion.model_validate(price_quote.promotion)
            if price_quote.promotion is not None
            else None
        ),
        "promotional_price": price_quote.promotional_price,
    }


class PricingService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def yacht_quote(self, request: YachtQuoteRequest) -> Dict[str, Any]:
        yacht = await YachtService(self.db).get(request.yacht_id)
        available_options = [option for option in yacht.options if option.is_active]
        promotions = await PromotionService(self.db).get_all()
        price_quote = quote(
            yacht,
            request.quantity,
            request.selected_option_ids,
            available_options,
            promotions,
            duration_type=request.duration_type,
        )
        return _quote_response(price_quote)

    async def service_quote(self, request: ServiceQuoteRequest) -> Dict[str, Any]:
        kind = require_service_kind(request.item_kind)
        item = await load_catalog_item(self.db, kind, request.item_id)
        promotions = await PromotionService(self.db).get_all()
        return _quote_response(quote(item, request.quantity, promotions=promotions))

    async def _resolve_extras(self, extras: Optional[ExtrasRequest]) -> Optional[SelectedExtras]:
        if extras is None:
            return None

        resolved = SelectedExtras()
        water_sports = WaterSportService(self.db)
        for entry in extras.water_sports:
            water_sport = await water_sports.get_active(entry.water_sport_id)
            resolved.water_sports.append(
                WaterSportExtra(
                    name=water_sport.name,
                    duration=entry.duration,
                    price=resolve_unit_price(water_sport, entry.duration),
                )
            )
        food_items = FoodItemService(self.db)
        for entry in extras.food:
            food_item = await food_items.get_active(entry.food_item_id)
            resolved.food.append(
                FoodExtra(
                    name=food_item.name,
                    quantity=entry.quantity,
                    price_per_person=food_item.price_per_person,
                )
            )
        services = AdditionalServiceService(self.db)
        for service_id in extras.additional_service_ids:
            service = await services.get_active(service_id)
            resolved.additional_services.append(
                ServiceExtra(name=service.name, price=service.price)
            )
        return resolved

    async def _whatsapp_number(self, language: str) -> str:
        number = await SettingsService(self.db).get_whatsapp_number()
        if not number:
            raise BusinessRuleViolationError(
                "whatsapp_not_configured", message("whatsapp_not_configured", language)
            )
        return number

    async def whatsapp_link(
        self, request: WhatsAppLinkRequest, language: str = "en"
    ) -> Dict[str, str]:
        """
        Validated ``wa.me`` link for a yacht booking request.

        Nothing is stored; the booking is arranged in the chat.
        """
        yacht = await YachtService(self.db).get(request.yacht_id)

        draft = BookingDraft(
            customer_name=request.customer_name,
            customer_email=request.customer_email,
            customer_phone=request.customer_phone,
            hours=request.hours,
            selected_option_ids=list(request.selected_option_ids),
        )
        validation = validate_booking_draft(draft, language)
        if not validation.valid:
            raise FieldValidationError(
                validation.field_errors, message("invalid_input", language)
            )

        number = await self._whatsapp_number(language)
        available_options = [option for option in yacht.options if option.is_active]
        total_price = compute_total_price(
            yacht, draft.hours, draft.selected_option_ids, available_options
        )
        encoded = build_whatsapp_message(
            draft,
            total_price,
            select_options(draft.selected_option_ids, available_options),
            await self._resolve_extras(request.extras),
            yacht=yacht,
            language=language,
        )
        return {"url": build_whatsapp_url(number, encoded), "message": encoded}

    async def service_inquiry_link(
        self, request: ServiceInquiryRequest, language: str = "en"
    ) -> Dict[str, str]:
        kind = require_service_kind(request.item_kind)
        item = await load_catalog_item(self.db, kind, request.item_id)
        number = await self._whatsapp_number(language)
        encoded = build_service_inquiry_message(item)
        return {"url": build_whatsapp_url(number, encoded), "message": encoded}

from fastapi import APIRouter

from charter.core.common_deps import LanguageDep, PricingServiceDep
from charter.schemas.pricing import (
    PriceQuote,
    ServiceInquiryRequest,
    ServiceQuoteRequest,
    WhatsAppLink,
    WhatsAppLinkRequest,
    YachtQuoteRequest,
)

router = APIRouter()


@router.post("/yacht-quote", response_model=PriceQuote)
async def yacht_quote(request: YachtQuoteRequest, service: PricingServiceDep):
    return await service.yacht_quote(request)


@router.post("/service-quote", response_model=PriceQuote)
async def service_quote(request: ServiceQuoteRequest, service: PricingServiceDep):
    return await service.service_quote(request)


@router.post("/whatsapp-link", response_model=WhatsAppLink)
async def whatsapp_link(
    request: WhatsAppLinkRequest, service: PricingServiceDep, language: LanguageDep
):
    return await service.whatsapp_link(request, language)


@router.post("/whatsapp-inquiry", response_model=WhatsAppLink)
async def whatsapp_inquiry(
    request: ServiceInquiryRequest, service: PricingServiceDep, language: LanguageDep
):
    return await service.service_inquiry_link(request, language)

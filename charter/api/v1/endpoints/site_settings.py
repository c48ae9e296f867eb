from fastapi import APIRouter

from charter.core.common_deps import AdminUserDep, SettingsServiceDep
from charter.schemas.settings import WhatsAppNumber, WhatsAppNumberUpdate

router = APIRouter()


@router.get("/whatsapp-number", response_model=WhatsAppNumber)
async def get_whatsapp_number(service: SettingsServiceDep):
    return WhatsAppNumber(whatsapp_number=await service.get_whatsapp_number())


@router.put("/whatsapp-number", response_model=WhatsAppNumber)
async def set_whatsapp_number(
    data: WhatsAppNumberUpdate,
    service: SettingsServiceDep,
    current_user: AdminUserDep,
):
    return WhatsAppNumber(
        whatsapp_number=await service.set_whatsapp_number(data.whatsapp_number)
    )

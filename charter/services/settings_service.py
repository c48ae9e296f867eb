from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from charter.core.change_feed import change_feed
from charter.core.whatsapp import normalize_whatsapp_number
from charter.models.site_setting import WHATSAPP_NUMBER_KEY, SiteSetting


class SettingsService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_setting(self, key: str) -> Optional[SiteSetting]:
        result = await self.db.execute(select(SiteSetting).where(SiteSetting.key == key))
        return result.scalar_one_or_none()

    async def get_value(self, key: str) -> Optional[str]:
        setting = await self.get_setting(key)
        return setting.value if setting is not None else None

    async def set_value(self, key: str, value: str, value_type: str = "text") -> SiteSetting:
        setting = await self.get_setting(key)
        if setting is None:
            setting = SiteSetting(key=key, value=value, type=value_type)
            self.db.add(setting)
            event = "INSERT"
        else:
            setting.value = value
            event = "UPDATE"

        await self.db.commit()
        await self.db.refresh(setting)
        change_feed.publish("site_settings", event)
        return setting

    async def get_whatsapp_number(self) -> Optional[str]:
        return await self.get_value(WHATSAPP_NUMBER_KEY)

    async def set_whatsapp_number(self, number: str) -> str:
        """Store the number as bare digits, the form wa.me links need."""
        digits = normalize_whatsapp_number(number)
        setting = await self.set_value(WHATSAPP_NUMBER_KEY, digits)
        return setting.value

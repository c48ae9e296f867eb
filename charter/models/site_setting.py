from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text

from charter.models.base import Base

WHATSAPP_NUMBER_KEY = "whatsapp_number"


class SiteSetting(Base):
    __tablename__ = "site_settings"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String, nullable=False, unique=True)
    value = Column(Text, nullable=True)
    type = Column(String, default="text", nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

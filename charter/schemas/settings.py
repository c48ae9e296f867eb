from typing import Optional

from pydantic import BaseModel, Field


class WhatsAppNumber(BaseModel):
    whatsapp_number: Optional[str] = Field(None, examples=["971501234567"])


class WhatsAppNumberUpdate(BaseModel):
    whatsapp_number: str = Field(..., min_length=1, examples=["+971 50 123 4567"])

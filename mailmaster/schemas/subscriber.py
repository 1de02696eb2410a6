from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from .validators import require_text, optional_text


class SubscriberCreate(BaseModel):
    email: EmailStr
    name: str = Field(..., max_length=255)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return require_text(value)


class SubscriberUpdate(BaseModel):
    email: EmailStr
    name: Optional[str] = Field(None, max_length=255)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        return optional_text(value)


class SubscriberResponse(BaseModel):
    id: int
    email: str
    name: str
    user_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

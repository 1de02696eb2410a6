from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

from .validators import require_text, optional_text


class NewsletterCreate(BaseModel):
    title: str = Field(..., max_length=255)
    content: str

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return require_text(value)


class NewsletterUpdate(BaseModel):
    """Title is replaced; content is kept when omitted."""
    title: str = Field(..., max_length=255)
    content: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        return require_text(value)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: Optional[str]) -> Optional[str]:
        return optional_text(value)


class NewsletterResponse(BaseModel):
    id: int
    title: str
    content: str
    user_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from enum import Enum

from .validators import require_text, utc_naive


class CampaignStatus(str, Enum):
    draft = "draft"
    pending = "pending"
    sent = "sent"


class CampaignCreate(BaseModel):
    """Status defaults to draft; omitting subscriber_ids leaves the list alone."""
    subject: str = Field(..., max_length=255)
    content: str
    newsletter_id: int
    status: CampaignStatus = CampaignStatus.draft
    sent_at: Optional[datetime] = None
    subscriber_ids: Optional[List[int]] = None

    @field_validator("subject", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return require_text(value)

    @field_validator("sent_at")
    @classmethod
    def sent_at_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return utc_naive(value)


class CampaignUpdate(BaseModel):
    """Full replacement: status and sent_at must be sent, sent_at may be null."""
    subject: str = Field(..., max_length=255)
    content: str
    newsletter_id: int
    status: CampaignStatus
    sent_at: Optional[datetime]
    subscriber_ids: Optional[List[int]] = None

    @field_validator("subject", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return require_text(value)

    @field_validator("sent_at")
    @classmethod
    def sent_at_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return utc_naive(value)


class CampaignSubscriberResponse(BaseModel):
    id: int
    email: str
    name: str
    user_id: int
    opened: bool
    opened_at: Optional[datetime] = None


class CampaignResponse(BaseModel):
    id: int
    subject: str
    content: str
    newsletter_id: int
    user_id: int
    status: str
    sent_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    subscribers: Optional[List[CampaignSubscriberResponse]] = None


class OpenStateResponse(BaseModel):
    campaign_id: int
    subscriber_id: int
    opened: bool
    opened_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

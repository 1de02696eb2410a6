"""
Campaign model and its per-subscriber association.
"""
from sqlalchemy import Column, Integer, String, DateTime, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from ..database import Base


CAMPAIGN_STATUSES = ("draft", "pending", "sent")


class Campaign(Base):
    __tablename__ = "campaigns"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    newsletter_id = Column(Integer, ForeignKey("newsletters.id"), nullable=False, index=True)
    subject = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    status = Column(String(20), default="draft", nullable=False, index=True)  # draft, pending, sent
    sent_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # Relationships
    user = relationship("User", back_populates="campaigns")
    newsletter = relationship("Newsletter", back_populates="campaigns")
    subscriber_links = relationship(
        "CampaignSubscriber",
        back_populates="campaign",
        cascade="all, delete-orphan",
        order_by="CampaignSubscriber.subscriber_id",
    )


class CampaignSubscriber(Base):
    """Join row between a campaign and a subscriber, carrying open state."""

    __tablename__ = "campaign_subscriber"

    campaign_id = Column(Integer, ForeignKey("campaigns.id", ondelete="CASCADE"), primary_key=True)
    subscriber_id = Column(Integer, ForeignKey("subscribers.id", ondelete="CASCADE"), primary_key=True)
    opened = Column(Boolean, default=False, nullable=False)
    opened_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    campaign = relationship("Campaign", back_populates="subscriber_links")
    subscriber = relationship("Subscriber", back_populates="campaign_links")

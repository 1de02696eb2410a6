"""
Campaign store and the campaign-subscriber association.

Supplying ``subscriber_ids`` on create or update replaces the association set
outright: pairs missing from the list are dropped, new pairs start unopened,
and pairs that survive keep their ``opened``/``opened_at`` state. Omitting the
list leaves the set untouched. The field update and the association changes
are committed together.
"""
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple
from sqlalchemy.orm import Session, selectinload

from ..exceptions import NotFoundError, ValidationError
from ..logging_config import db_logger, timed
from ..models.campaign import Campaign, CampaignSubscriber
from ..models.newsletter import Newsletter
from ..models.subscriber import Subscriber
from ..schemas.campaign import (
    CampaignCreate,
    CampaignUpdate,
    CampaignResponse,
    CampaignSubscriberResponse,
    OpenStateResponse,
)
from .scoping import owned, get_owned


def campaign_to_response(campaign: Campaign, include_subscribers: bool = True) -> CampaignResponse:
    """Materialize a Campaign row, optionally with its subscribers and their open state."""
    subscribers = None
    if include_subscribers:
        subscribers = [
            CampaignSubscriberResponse(
                id=link.subscriber.id,
                email=link.subscriber.email,
                name=link.subscriber.name,
                user_id=link.subscriber.user_id,
                opened=link.opened,
                opened_at=link.opened_at,
            )
            for link in campaign.subscriber_links
        ]

    return CampaignResponse(
        id=campaign.id,
        subject=campaign.subject,
        content=campaign.content,
        newsletter_id=campaign.newsletter_id,
        user_id=campaign.user_id,
        status=campaign.status,
        sent_at=campaign.sent_at,
        created_at=campaign.created_at,
        updated_at=campaign.updated_at,
        subscribers=subscribers,
    )


def _require_newsletter(db: Session, owner_id: int, newsletter_id: int) -> None:
    if not owned(db, Newsletter, owner_id).filter(Newsletter.id == newsletter_id).first():
        raise ValidationError.for_field("newsletter_id", "The selected newsletter id is invalid.")


def _require_subscribers(db: Session, owner_id: int, subscriber_ids: Iterable[int]) -> List[int]:
    """Return the ids de-duplicated in order, or fail if any is not the owner's subscriber."""
    wanted = list(dict.fromkeys(subscriber_ids))
    if not wanted:
        return wanted

    found = {
        row.id
        for row in owned(db, Subscriber, owner_id).with_entities(Subscriber.id).filter(Subscriber.id.in_(wanted))
    }
    missing = [sid for sid in wanted if sid not in found]
    if missing:
        raise ValidationError(
            "The selected subscriber ids are invalid.",
            {"field": "subscriber_ids", "invalid_ids": missing},
        )
    return wanted


@timed(db_logger)
def sync_subscribers(campaign: Campaign, subscriber_ids: List[int]) -> Tuple[int, int]:
    """Make the campaign's association set exactly ``subscriber_ids``.

    Returns (attached, detached) counts.
    """
    current = {link.subscriber_id: link for link in campaign.subscriber_links}
    wanted = set(subscriber_ids)

    detached = 0
    for subscriber_id, link in current.items():
        if subscriber_id not in wanted:
            campaign.subscriber_links.remove(link)
            detached += 1

    attached = 0
    for subscriber_id in subscriber_ids:
        if subscriber_id not in current:
            campaign.subscriber_links.append(CampaignSubscriber(subscriber_id=subscriber_id, opened=False))
            attached += 1

    return attached, detached


def _load(db: Session, owner_id: int, campaign_id: int, include_subscribers: bool = True) -> Campaign:
    query = owned(db, Campaign, owner_id).filter(Campaign.id == campaign_id)
    if include_subscribers:
        query = query.options(selectinload(Campaign.subscriber_links).selectinload(CampaignSubscriber.subscriber))
    campaign = query.first()
    if campaign is None:
        raise NotFoundError("Campaign")
    return campaign


def list_campaigns(
    db: Session,
    owner_id: int,
    status: Optional[str] = None,
    include_subscribers: bool = True,
) -> List[CampaignResponse]:
    query = owned(db, Campaign, owner_id)
    if status:
        query = query.filter(Campaign.status == status)
    if include_subscribers:
        query = query.options(selectinload(Campaign.subscriber_links).selectinload(CampaignSubscriber.subscriber))

    campaigns = query.order_by(Campaign.id).all()
    return [campaign_to_response(c, include_subscribers) for c in campaigns]


def get_campaign(db: Session, owner_id: int, campaign_id: int, include_subscribers: bool = True) -> CampaignResponse:
    return campaign_to_response(_load(db, owner_id, campaign_id, include_subscribers), include_subscribers)


def create_campaign(db: Session, owner_id: int, data: CampaignCreate) -> CampaignResponse:
    _require_newsletter(db, owner_id, data.newsletter_id)
    subscriber_ids = None
    if data.subscriber_ids is not None:
        subscriber_ids = _require_subscribers(db, owner_id, data.subscriber_ids)

    campaign = Campaign(
        user_id=owner_id,
        newsletter_id=data.newsletter_id,
        subject=data.subject,
        content=data.content,
        status=data.status.value,
        sent_at=data.sent_at,
    )
    db.add(campaign)
    if subscriber_ids is not None:
        sync_subscribers(campaign, subscriber_ids)

    db.commit()
    db.refresh(campaign)

    db_logger.info(
        "Campaign created",
        campaign_id=campaign.id,
        owner_id=owner_id,
        subscribers=len(campaign.subscriber_links),
    )
    return campaign_to_response(campaign)


def update_campaign(db: Session, owner_id: int, campaign_id: int, data: CampaignUpdate) -> CampaignResponse:
    """Replace every editable field; the association set only when ids are supplied."""
    campaign = _load(db, owner_id, campaign_id)
    _require_newsletter(db, owner_id, data.newsletter_id)
    subscriber_ids = None
    if data.subscriber_ids is not None:
        subscriber_ids = _require_subscribers(db, owner_id, data.subscriber_ids)

    campaign.subject = data.subject
    campaign.content = data.content
    campaign.newsletter_id = data.newsletter_id
    campaign.status = data.status.value
    campaign.sent_at = data.sent_at

    if subscriber_ids is not None:
        attached, detached = sync_subscribers(campaign, subscriber_ids)
        db_logger.info("Campaign subscribers synced", campaign_id=campaign.id, attached=attached, detached=detached)

    db.commit()
    db.refresh(campaign)
    return campaign_to_response(campaign)


def delete_campaign(db: Session, owner_id: int, campaign_id: int) -> None:
    """Hard delete together with the campaign's association rows."""
    campaign = get_owned(db, Campaign, owner_id, campaign_id, "Campaign")
    db.delete(campaign)
    db.commit()
    db_logger.info("Campaign deleted", campaign_id=campaign_id, owner_id=owner_id)


def mark_opened(db: Session, owner_id: int, campaign_id: int, subscriber_id: int) -> OpenStateResponse:
    """Record that a subscriber opened the campaign. The first open time is kept."""
    campaign = get_owned(db, Campaign, owner_id, campaign_id, "Campaign")
    link = db.query(CampaignSubscriber).filter(
        CampaignSubscriber.campaign_id == campaign.id,
        CampaignSubscriber.subscriber_id == subscriber_id,
    ).first()
    if link is None:
        raise NotFoundError("Subscriber")

    if not link.opened:
        link.opened = True
        link.opened_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(link)
        db_logger.info("Campaign opened", campaign_id=campaign.id, subscriber_id=subscriber_id)

    return OpenStateResponse.model_validate(link)

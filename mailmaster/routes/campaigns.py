"""
Campaign routes for CRUD operations and open tracking.
"""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import List, Optional

from ..database import get_db
from ..models.user import User
from ..repositories import campaigns as store
from ..schemas.campaign import (
    CampaignStatus,
    CampaignCreate,
    CampaignUpdate,
    CampaignResponse,
    OpenStateResponse,
)
from ..auth import get_required_user
from ..config import get_settings

settings = get_settings()

router = APIRouter(prefix=f"{settings.api_prefix}/campaigns", tags=["campaigns"])


@router.get("", response_model=List[CampaignResponse])
def get_campaigns(
    status: Optional[CampaignStatus] = None,
    include_subscribers: bool = True,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Get all campaigns for the current user with optional status filter."""
    return store.list_campaigns(
        db,
        current_user.id,
        status=status.value if status else None,
        include_subscribers=include_subscribers,
    )


@router.post("", response_model=CampaignResponse, status_code=201)
def create_campaign(
    campaign_data: CampaignCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    return store.create_campaign(db, current_user.id, campaign_data)


@router.get("/{campaign_id}", response_model=CampaignResponse)
def get_campaign(
    campaign_id: int,
    include_subscribers: bool = True,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    return store.get_campaign(db, current_user.id, campaign_id, include_subscribers)


@router.put("/{campaign_id}", response_model=CampaignResponse)
def update_campaign(
    campaign_id: int,
    campaign_update: CampaignUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Replace a campaign's fields, and its subscribers when subscriber_ids is sent."""
    return store.update_campaign(db, current_user.id, campaign_id, campaign_update)


@router.delete("/{campaign_id}", status_code=204)
def delete_campaign(
    campaign_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    store.delete_campaign(db, current_user.id, campaign_id)
    return Response(status_code=204)


@router.post("/{campaign_id}/subscribers/{subscriber_id}/open", response_model=OpenStateResponse)
def open_campaign(
    campaign_id: int,
    subscriber_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Mark the campaign as opened by one of its subscribers."""
    return store.mark_opened(db, current_user.id, campaign_id, subscriber_id)

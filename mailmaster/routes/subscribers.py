"""
Subscriber routes. Every call is scoped to the authenticated owner.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List

from ..database import get_db
from ..models.user import User
from ..repositories import subscribers as store
from ..schemas.subscriber import SubscriberCreate, SubscriberUpdate, SubscriberResponse
from ..auth import get_required_user
from ..config import get_settings

settings = get_settings()

router = APIRouter(prefix=f"{settings.api_prefix}/subscribers", tags=["subscribers"])


@router.get("", response_model=List[SubscriberResponse])
def get_subscribers(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    return store.list_subscribers(db, current_user.id)


@router.post("", response_model=SubscriberResponse, status_code=status.HTTP_201_CREATED)
def create_subscriber(
    subscriber_data: SubscriberCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Create a subscriber. The email must not exist for any user."""
    return store.create_subscriber(db, current_user.id, subscriber_data)


@router.get("/{subscriber_id}", response_model=SubscriberResponse)
def get_subscriber(
    subscriber_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    return store.get_subscriber(db, current_user.id, subscriber_id)


@router.put("/{subscriber_id}", response_model=SubscriberResponse)
def update_subscriber(
    subscriber_id: int,
    subscriber_update: SubscriberUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    return store.update_subscriber(db, current_user.id, subscriber_id, subscriber_update)


@router.delete("/{subscriber_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subscriber(
    subscriber_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    store.delete_subscriber(db, current_user.id, subscriber_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

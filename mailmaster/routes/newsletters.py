"""
Newsletter routes. Every call is scoped to the authenticated owner.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List

from ..database import get_db
from ..models.user import User
from ..repositories import newsletters as store
from ..schemas.newsletter import NewsletterCreate, NewsletterUpdate, NewsletterResponse
from ..auth import get_required_user
from ..config import get_settings

settings = get_settings()

router = APIRouter(prefix=f"{settings.api_prefix}/newsletters", tags=["newsletters"])


@router.get("", response_model=List[NewsletterResponse])
def get_newsletters(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Get all newsletters for the current user."""
    return store.list_newsletters(db, current_user.id)


@router.post("", response_model=NewsletterResponse, status_code=status.HTTP_201_CREATED)
def create_newsletter(
    newsletter_data: NewsletterCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    return store.create_newsletter(db, current_user.id, newsletter_data)


@router.get("/{newsletter_id}", response_model=NewsletterResponse)
def get_newsletter(
    newsletter_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    return store.get_newsletter(db, current_user.id, newsletter_id)


@router.put("/{newsletter_id}", response_model=NewsletterResponse)
def update_newsletter(
    newsletter_id: int,
    newsletter_update: NewsletterUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    return store.update_newsletter(db, current_user.id, newsletter_id, newsletter_update)


@router.delete("/{newsletter_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_newsletter(
    newsletter_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Delete a newsletter that no campaign uses any more."""
    store.delete_newsletter(db, current_user.id, newsletter_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""
Subscriber store. Email addresses are unique across every owner, so the
uniqueness check deliberately ignores the ownership gate.
"""
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..exceptions import ValidationError
from ..logging_config import db_logger
from ..models.subscriber import Subscriber
from ..schemas.subscriber import SubscriberCreate, SubscriberUpdate, SubscriberResponse
from .scoping import owned, get_owned

EMAIL_TAKEN = "The email has already been taken."


def _ensure_email_available(db: Session, email: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(Subscriber.id).filter(func.lower(Subscriber.email) == email.lower())
    if exclude_id is not None:
        query = query.filter(Subscriber.id != exclude_id)
    if query.first():
        raise ValidationError.for_field("email", EMAIL_TAKEN)


def _commit_unique(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError.for_field("email", EMAIL_TAKEN)


def list_subscribers(db: Session, owner_id: int) -> List[SubscriberResponse]:
    subscribers = owned(db, Subscriber, owner_id).order_by(Subscriber.id).all()
    return [SubscriberResponse.model_validate(s) for s in subscribers]


def get_subscriber(db: Session, owner_id: int, subscriber_id: int) -> SubscriberResponse:
    subscriber = get_owned(db, Subscriber, owner_id, subscriber_id, "Subscriber")
    return SubscriberResponse.model_validate(subscriber)


def create_subscriber(db: Session, owner_id: int, data: SubscriberCreate) -> SubscriberResponse:
    _ensure_email_available(db, data.email)

    subscriber = Subscriber(user_id=owner_id, email=data.email, name=data.name)
    db.add(subscriber)
    _commit_unique(db)
    db.refresh(subscriber)

    db_logger.info("Subscriber created", subscriber_id=subscriber.id, owner_id=owner_id)
    return SubscriberResponse.model_validate(subscriber)


def update_subscriber(db: Session, owner_id: int, subscriber_id: int, data: SubscriberUpdate) -> SubscriberResponse:
    """Replace the email (and name when given). Keeping the same email is allowed."""
    subscriber = get_owned(db, Subscriber, owner_id, subscriber_id, "Subscriber")
    _ensure_email_available(db, data.email, exclude_id=subscriber.id)

    subscriber.email = data.email
    if data.name is not None:
        subscriber.name = data.name

    _commit_unique(db)
    db.refresh(subscriber)
    return SubscriberResponse.model_validate(subscriber)


def delete_subscriber(db: Session, owner_id: int, subscriber_id: int) -> None:
    """Hard delete; the subscriber also leaves every campaign it was attached to."""
    subscriber = get_owned(db, Subscriber, owner_id, subscriber_id, "Subscriber")
    db.delete(subscriber)
    db.commit()
    db_logger.info("Subscriber deleted", subscriber_id=subscriber_id, owner_id=owner_id)

"""
Newsletter store.
"""
from typing import List
from sqlalchemy.orm import Session

from ..exceptions import ValidationError
from ..logging_config import db_logger
from ..models.campaign import Campaign
from ..models.newsletter import Newsletter
from ..schemas.newsletter import NewsletterCreate, NewsletterUpdate, NewsletterResponse
from .scoping import owned, get_owned


def list_newsletters(db: Session, owner_id: int) -> List[NewsletterResponse]:
    newsletters = owned(db, Newsletter, owner_id).order_by(Newsletter.id).all()
    return [NewsletterResponse.model_validate(n) for n in newsletters]


def get_newsletter(db: Session, owner_id: int, newsletter_id: int) -> NewsletterResponse:
    newsletter = get_owned(db, Newsletter, owner_id, newsletter_id, "Newsletter")
    return NewsletterResponse.model_validate(newsletter)


def create_newsletter(db: Session, owner_id: int, data: NewsletterCreate) -> NewsletterResponse:
    newsletter = Newsletter(user_id=owner_id, title=data.title, content=data.content)
    db.add(newsletter)
    db.commit()
    db.refresh(newsletter)

    db_logger.info("Newsletter created", newsletter_id=newsletter.id, owner_id=owner_id)
    return NewsletterResponse.model_validate(newsletter)


def update_newsletter(db: Session, owner_id: int, newsletter_id: int, data: NewsletterUpdate) -> NewsletterResponse:
    """Replace the title, and the content when one is supplied."""
    newsletter = get_owned(db, Newsletter, owner_id, newsletter_id, "Newsletter")

    newsletter.title = data.title
    if data.content is not None:
        newsletter.content = data.content

    db.commit()
    db.refresh(newsletter)
    return NewsletterResponse.model_validate(newsletter)


def delete_newsletter(db: Session, owner_id: int, newsletter_id: int) -> None:
    """Hard delete. Refused while any campaign still points at the newsletter."""
    newsletter = get_owned(db, Newsletter, owner_id, newsletter_id, "Newsletter")

    in_use = db.query(Campaign).filter(Campaign.newsletter_id == newsletter.id).count()
    if in_use:
        raise ValidationError(
            "The newsletter is still used by campaigns.",
            {"field": "newsletter_id", "campaigns": in_use},
        )

    db.delete(newsletter)
    db.commit()
    db_logger.info("Newsletter deleted", newsletter_id=newsletter_id, owner_id=owner_id)

"""
Ownership gate shared by every store.

All reads and writes go through ``owned`` so rows are always filtered by the
caller's ``user_id``. A row that exists but belongs to someone else is
reported exactly like a missing one.
"""
from typing import Type, TypeVar
from sqlalchemy.orm import Query, Session

from ..exceptions import NotFoundError

ModelT = TypeVar("ModelT")


def owned(db: Session, model: Type[ModelT], owner_id: int) -> Query:
    """Query ``model`` restricted to rows owned by ``owner_id``."""
    return db.query(model).filter(model.user_id == owner_id)


def get_owned(db: Session, model: Type[ModelT], owner_id: int, record_id: int, resource: str) -> ModelT:
    """Fetch one owned row or raise NotFoundError."""
    record = owned(db, model, owner_id).filter(model.id == record_id).first()
    if record is None:
        raise NotFoundError(resource)
    return record

"""
Identity store: registration, login and token revocation.
"""
from typing import Tuple
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..auth import create_access_token, get_password_hash, revoke_tokens, verify_password
from ..exceptions import AuthenticationError, ValidationError
from ..logging_config import auth_logger
from ..models.user import User
from ..schemas.auth import UserCreate

EMAIL_TAKEN = "The email has already been taken."

# Checked against when the email is unknown so both failures cost one bcrypt round
DUMMY_HASH = get_password_hash("mailmaster-unknown-user")


def find_by_email(db: Session, email: str):
    return db.query(User).filter(func.lower(User.email) == email.lower()).first()


def register(db: Session, data: UserCreate) -> Tuple[User, str]:
    """Create an account and issue its first token."""
    if find_by_email(db, data.email):
        raise ValidationError.for_field("email", EMAIL_TAKEN)

    user = User(
        name=data.name,
        email=data.email,
        hashed_password=get_password_hash(data.password),
    )
    db.add(user)
    try:
        db.flush()
        token = create_access_token(db, user)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError.for_field("email", EMAIL_TAKEN)

    db.refresh(user)
    auth_logger.info("User registered", user_id=user.id)
    return user, token


def login(db: Session, email: str, password: str) -> Tuple[User, str]:
    """Check credentials and issue a new token.

    The error never says whether the email or the password was wrong.
    """
    user = find_by_email(db, email)
    if user is None:
        verify_password(password, DUMMY_HASH)
    if user is None or not verify_password(password, user.hashed_password):
        auth_logger.warning("Failed login attempt")
        raise AuthenticationError("Invalid credentials")

    token = create_access_token(db, user)
    db.commit()
    db.refresh(user)
    auth_logger.info("User logged in", user_id=user.id)
    return user, token


def logout(db: Session, user: User) -> int:
    """Revoke all of the user's tokens, not only the one presented."""
    revoked = revoke_tokens(db, user)
    db.commit()
    auth_logger.info("User logged out", user_id=user.id, revoked_tokens=revoked)
    return revoked

"""
Authentication utilities: password hashing, bearer tokens and the FastAPI
dependencies that resolve the calling user.

Tokens are signed JWTs whose ``jti`` names a PersonalAccessToken row. A token
is only honoured while that row exists, so deleting a user's rows revokes
every token issued to them.
"""
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .exceptions import AuthenticationError
from .logging_config import auth_logger
from .models.user import User, PersonalAccessToken
from .config import get_settings

settings = get_settings()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer_scheme = HTTPBearer(auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password for storage."""
    return pwd_context.hash(password)


def create_access_token(db: Session, user: User, name: Optional[str] = None) -> str:
    """Record a new token row for ``user`` and return the signed bearer token."""
    token_id = secrets.token_hex(20)
    db.add(PersonalAccessToken(user_id=user.id, name=name or settings.token_name, token_id=token_id))
    db.flush()

    to_encode = {"sub": str(user.id), "jti": token_id, "type": "access"}
    if settings.access_token_expire_minutes:
        to_encode["exp"] = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def verify_token(token: str) -> Optional[dict]:
    """Check the signature and claims of a token and return its payload."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    if payload.get("type") != "access" or not payload.get("jti"):
        return None
    return payload


def resolve_token(db: Session, token: str) -> Optional[PersonalAccessToken]:
    """Return the live token row behind ``token``, or None if it is invalid or revoked."""
    payload = verify_token(token)
    if not payload:
        return None

    try:
        user_id = int(payload.get("sub"))
    except (ValueError, TypeError):
        return None

    return db.query(PersonalAccessToken).filter(
        PersonalAccessToken.token_id == payload["jti"],
        PersonalAccessToken.user_id == user_id,
    ).first()


def revoke_tokens(db: Session, user: User) -> int:
    """Delete every token row of ``user``. Returns how many were revoked."""
    return db.query(PersonalAccessToken).filter(
        PersonalAccessToken.user_id == user.id
    ).delete(synchronize_session=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Get the current user from the bearer token (optional auth)."""
    if not credentials:
        return None

    access_token = resolve_token(db, credentials.credentials)
    if not access_token:
        auth_logger.warning("Rejected bearer token")
        return None

    access_token.last_used_at = datetime.now(timezone.utc)
    db.commit()
    return access_token.user


def get_required_user(
    current_user: Optional[User] = Depends(get_current_user)
) -> User:
    """Get the current user, raising 401 if not authenticated."""
    if not current_user:
        raise AuthenticationError()
    return current_user

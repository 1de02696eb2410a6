"""
Authentication routes for register, login, logout and the current user.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.user import User
from ..repositories import users as identity
from ..schemas.auth import (
    UserCreate,
    UserLogin,
    UserResponse,
    RegisterResponse,
    LoginResponse,
    MessageResponse,
)
from ..auth import get_required_user
from ..config import get_settings

settings = get_settings()

router = APIRouter(prefix=settings.api_prefix, tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user account and issue a token."""
    user, token = identity.register(db, user_data)
    return RegisterResponse(
        message="User registered successfully",
        user=UserResponse.model_validate(user),
        token=token,
    )


@router.post("/login", response_model=LoginResponse)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login with JSON body (email/password)."""
    user, token = identity.login(db, credentials.email, credentials.password)
    return LoginResponse(user=UserResponse.model_validate(user), token=token)


@router.post("/logout", response_model=MessageResponse)
def logout(current_user: User = Depends(get_required_user), db: Session = Depends(get_db)):
    """Revoke every token of the current user, on all devices."""
    identity.logout(db, current_user)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_required_user)):
    """Get current authenticated user."""
    return current_user


@router.get("/user", response_model=UserResponse)
def get_user(current_user: User = Depends(get_required_user)):
    """Alias of /me."""
    return current_user

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from datetime import datetime

from .validators import require_text


class UserCreate(BaseModel):
    name: str = Field(..., max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=1)
    password_confirmation: str

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return require_text(value)

    @model_validator(mode="after")
    def passwords_match(self) -> "UserCreate":
        if self.password != self.password_confirmation:
            raise ValueError("password confirmation does not match")
        return self


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RegisterResponse(BaseModel):
    message: str
    user: UserResponse
    token: str


class LoginResponse(BaseModel):
    user: UserResponse
    token: str


class MessageResponse(BaseModel):
    message: str

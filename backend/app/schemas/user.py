# backend/app/schemas/user.py
import re
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from backend.app.schemas.common import CamelModel


def _check_password_strength(value: str) -> str:
    if len(value) < 8:
        raise ValueError("Password must be at least 8 characters")
    if not re.search(r"[A-Z]", value):
        raise ValueError("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", value):
        raise ValueError("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", value):
        raise ValueError("Password must contain at least one number")
    return value


# Body of POST /auth/register
class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(..., max_length=128)
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)

    @field_validator("password")
    @classmethod
    def password_strength(cls, v: str) -> str:
        return _check_password_strength(v)


# Body of POST /auth/login
class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class UserUpdate(CamelModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)


# What the API returns for a user (never the hash or refresh token)
class UserResponse(CamelModel):
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None


class UserProfile(UserResponse):
    email_verified: bool = False
    updated_at: Optional[datetime] = None


class UserAdminView(UserResponse):
    is_active: bool


class AuthResponse(CamelModel):
    user: UserResponse
    access_token: str
    refresh_token: str


class RefreshRequest(CamelModel):
    # Optional so a missing token maps to MISSING_REFRESH_TOKEN, not a validation error
    refresh_token: Optional[str] = None


class AccessTokenResponse(CamelModel):
    access_token: str
    # Only present when ROTATE_REFRESH_TOKENS is enabled
    refresh_token: Optional[str] = None

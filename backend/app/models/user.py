# backend/app/models/user.py
import enum
import uuid

from sqlalchemy import Column, String, Boolean, DateTime, Text
from sqlalchemy.sql import func

from backend.app.db.base import Base


class UserRole(str, enum.Enum):
    FREE = "FREE"
    PREMIUM = "PREMIUM"
    ADMIN = "ADMIN"


PREMIUM_ROLES = frozenset({UserRole.PREMIUM.value, UserRole.ADMIN.value})


def new_user_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_user_id)

    # Always stored lowercase; lookups compare lower(email)
    email = Column(String(255), unique=True, index=True, nullable=False)

    # bcrypt output, never the plaintext
    password_hash = Column(String(255), nullable=False)

    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)

    role = Column(String(16), nullable=False, default=UserRole.FREE.value)
    is_active = Column(Boolean, nullable=False, default=True)
    email_verified = Column(Boolean, nullable=False, default=False)

    # The one refresh token currently accepted for this user.
    # NULL after logout; overwritten by every login.
    refresh_token = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

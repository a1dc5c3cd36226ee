# backend/app/schemas/token.py
from datetime import datetime

from pydantic import BaseModel


class TokenClaims(BaseModel):
    """
    Verified access-token claims.

    Produced once by security.tokens.decode_access_token and passed to
    handlers as the authenticated identity.
    """
    id: str
    email: str
    role: str
    issued_at: datetime
    expires_at: datetime


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str

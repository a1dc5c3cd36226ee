# backend/app/security/tokens.py
"""
JWT issuance and verification.

Two token classes, signed with two different secrets:

- access:  {sub, email, role, type="access", iat, exp}, default 15 minutes
- refresh: {sub, type="refresh", jti, iat, exp},       default 7 days

Access tokens are verified statelessly. A refresh token is only honoured
when it also equals the value stored on the user row (services/auth.py).

Every verification failure raises InvalidTokenError, whatever the cause,
so callers cannot leak which check failed.
"""
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from jose import jwt, JWTError
from pydantic import ValidationError

from backend.app.core.config import Settings, settings as default_settings
from backend.app.schemas.token import TokenClaims

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class InvalidTokenError(Exception):
    """Signature mismatch, expiry, malformed token or wrong token class."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(
    user_id: str,
    email: str,
    role: str,
    settings: Optional[Settings] = None,
) -> str:
    cfg = settings or default_settings
    issued_at = _now()
    payload = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "type": ACCESS_TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + cfg.access_token_ttl,
    }
    return jwt.encode(payload, cfg.JWT_ACCESS_SECRET, algorithm=cfg.ALGORITHM)


def create_refresh_token(user_id: str, settings: Optional[Settings] = None) -> str:
    cfg = settings or default_settings
    issued_at = _now()
    payload = {
        "sub": str(user_id),
        "type": REFRESH_TOKEN_TYPE,
        # Unique per token: two logins in the same second still differ
        "jti": uuid.uuid4().hex,
        "iat": issued_at,
        "exp": issued_at + cfg.refresh_token_ttl,
    }
    return jwt.encode(payload, cfg.JWT_REFRESH_SECRET, algorithm=cfg.ALGORITHM)


def _decode(token: str, secret: str, expected_type: str, algorithm: str) -> Dict[str, Any]:
    if not token or not isinstance(token, str):
        raise InvalidTokenError("empty token")
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError as exc:
        raise InvalidTokenError(str(exc)) from None
    if payload.get("type") != expected_type:
        raise InvalidTokenError(f"expected a {expected_type} token")
    if not payload.get("sub"):
        raise InvalidTokenError("missing subject")
    return payload


def decode_access_token(token: str, settings: Optional[Settings] = None) -> TokenClaims:
    cfg = settings or default_settings
    payload = _decode(token, cfg.JWT_ACCESS_SECRET, ACCESS_TOKEN_TYPE, cfg.ALGORITHM)
    try:
        return TokenClaims(
            id=payload["sub"],
            email=payload["email"],
            role=payload["role"],
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    except (KeyError, TypeError, ValueError, ValidationError) as exc:
        raise InvalidTokenError(f"malformed claims: {exc}") from None


def decode_refresh_token(token: str, settings: Optional[Settings] = None) -> str:
    """Verify a refresh token's signature and expiry; return the user id it names."""
    cfg = settings or default_settings
    payload = _decode(token, cfg.JWT_REFRESH_SECRET, REFRESH_TOKEN_TYPE, cfg.ALGORITHM)
    return str(payload["sub"])

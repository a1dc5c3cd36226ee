# backend/app/api/deps.py
"""
Request dependencies: database-backed services and the authorization gate.

Gate order on a protected route:
    get_current_claims  → 401 UNAUTHORIZED on any token problem
    require_role(...)   → 403 FORBIDDEN
    require_premium     → 403 PREMIUM_REQUIRED

Role checks read the role claim as issued; a role change is seen once the
holder gets a new access token.
"""
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.config import settings
from backend.app.core.errors import (
    ForbiddenError,
    PremiumRequiredError,
    UnauthorizedError,
    UserNotFoundError,
)
from backend.app.db.base import get_db
from backend.app.models.user import PREMIUM_ROLES, User
from backend.app.repositories.activity import ActivityLogRepository
from backend.app.repositories.users import UserRepository
from backend.app.schemas.token import TokenClaims
from backend.app.security import tokens
from backend.app.services.auth import AuthService

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must produce our UNAUTHORIZED envelope,
# not FastAPI's default 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_activity_repository(db: AsyncSession = Depends(get_db)) -> ActivityLogRepository:
    return ActivityLogRepository(db)


def get_auth_service(
    users: UserRepository = Depends(get_user_repository),
    activity: ActivityLogRepository = Depends(get_activity_repository),
) -> AuthService:
    return AuthService(users, activity, settings)


async def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenClaims:
    if credentials is None:
        raise UnauthorizedError()
    try:
        return tokens.decode_access_token(credentials.credentials, settings)
    except tokens.InvalidTokenError as exc:
        logger.info("Access token rejected: %s", exc)
        raise UnauthorizedError() from None


async def get_owner_claims(
    claims: TokenClaims = Depends(get_current_claims),
    users: UserRepository = Depends(get_user_repository),
) -> TokenClaims:
    """Claims of a caller whose account still exists. Guards writes of owned rows."""
    if await users.get_by_id(claims.id) is None:
        raise UserNotFoundError()
    return claims


async def get_current_user(
    claims: TokenClaims = Depends(get_current_claims),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    user = await users.get_by_id(claims.id)
    if user is None:
        raise UserNotFoundError()
    return user


def require_role(*allowed_roles: str):
    """Dependency factory: the caller's role claim must be one of allowed_roles."""
    allowed = frozenset(str(getattr(role, "value", role)) for role in allowed_roles)

    async def check_role(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
        if claims.role not in allowed:
            logger.info("Role %s denied (needs one of %s)", claims.role, sorted(allowed))
            raise ForbiddenError()
        return claims

    return check_role


async def require_premium(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
    if claims.role not in PREMIUM_ROLES:
        raise PremiumRequiredError()
    return claims

# backend/app/services/auth.py
"""
Session lifecycle: register, login, refresh, logout.

Invariant: a user has at most one valid refresh token, the one stored on
the user row. Login overwrites it (older sessions can no longer refresh),
logout clears it. Refresh re-reads the stored value on every call.

Failures are reported with fixed, non-distinguishing errors. Unknown
email, inactive account and wrong password all become
INVALID_CREDENTIALS; expired, forged, superseded and revoked refresh
tokens all become INVALID_REFRESH_TOKEN. The real cause goes to the log.
"""
import hmac
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from backend.app.core.config import Settings, settings as default_settings
from backend.app.core.errors import (
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    MissingRefreshTokenError,
    UserExistsError,
)
from backend.app.models.user import User, UserRole, new_user_id
from backend.app.repositories.users import DuplicateEmailError
from backend.app.security import hashing, tokens

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    async def get_by_email(self, email: str) -> Optional[User]: ...

    async def get_by_id(self, user_id: str) -> Optional[User]: ...

    async def create(self, user: User) -> User: ...

    async def set_refresh_token(self, user_id: str, token: Optional[str]) -> None: ...

    async def swap_refresh_token(self, user_id: str, expected: str, new_token: str) -> bool: ...


class ActivityStore(Protocol):
    async def log(
        self,
        user_id: str,
        action: str,
        entity: str,
        entity_id: Optional[str] = None,
        details: Optional[str] = None,
    ): ...


@dataclass
class AuthResult:
    user: User
    access_token: str
    refresh_token: str


@dataclass
class RefreshResult:
    access_token: str
    # Set only when refresh-token rotation is enabled
    refresh_token: Optional[str] = None


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _tokens_equal(presented: str, stored: Optional[str]) -> bool:
    if not stored:
        return False
    return hmac.compare_digest(presented.encode("utf-8"), stored.encode("utf-8"))


class AuthService:
    """Registration, login, token refresh and logout over injected stores."""

    def __init__(
        self,
        users: UserStore,
        activity: ActivityStore,
        settings: Optional[Settings] = None,
    ) -> None:
        self.users = users
        self.activity = activity
        self.settings = settings or default_settings

    def _access_token_for(self, user: User) -> str:
        return tokens.create_access_token(user.id, user.email, user.role, self.settings)

    def _refresh_token_for(self, user: User) -> str:
        return tokens.create_refresh_token(user.id, self.settings)

    async def register(
        self,
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> AuthResult:
        email = normalize_email(email)

        if await self.users.get_by_email(email) is not None:
            logger.info("Registration rejected: email already registered")
            raise UserExistsError()

        user = User(
            id=new_user_id(),
            email=email,
            password_hash=await hashing.hash_password_async(password),
            first_name=first_name,
            last_name=last_name,
            role=UserRole.FREE.value,
            is_active=True,
            email_verified=False,
        )
        access_token = self._access_token_for(user)
        refresh_token = self._refresh_token_for(user)
        # The user row is born holding its first refresh token
        user.refresh_token = refresh_token

        try:
            user = await self.users.create(user)
        except DuplicateEmailError:
            # Lost a race with a concurrent registration of the same email
            logger.info("Registration rejected: unique email constraint")
            raise UserExistsError() from None

        await self.activity.log(user.id, "USER_REGISTERED", "User", user.id)
        logger.info("User registered: %s", user.id)
        return AuthResult(user=user, access_token=access_token, refresh_token=refresh_token)

    async def login(self, email: str, password: str) -> AuthResult:
        user = await self.users.get_by_email(normalize_email(email))

        if user is None:
            await hashing.dummy_verify_async(password)
            logger.warning("Login failed: unknown email")
            raise InvalidCredentialsError()

        password_ok = await hashing.verify_password_async(password, user.password_hash)
        if not user.is_active:
            logger.warning("Login failed: inactive account %s", user.id)
            raise InvalidCredentialsError()
        if not password_ok:
            logger.warning("Login failed: wrong password for %s", user.id)
            raise InvalidCredentialsError()

        access_token = self._access_token_for(user)
        refresh_token = self._refresh_token_for(user)
        # Rotation point: any earlier refresh token stops working here
        await self.users.set_refresh_token(user.id, refresh_token)
        user.refresh_token = refresh_token

        await self.activity.log(user.id, "USER_LOGGED_IN", "User", user.id)
        logger.info("User logged in: %s", user.id)
        return AuthResult(user=user, access_token=access_token, refresh_token=refresh_token)

    async def refresh(self, refresh_token: Optional[str]) -> RefreshResult:
        if not refresh_token:
            raise MissingRefreshTokenError()

        try:
            user_id = tokens.decode_refresh_token(refresh_token, self.settings)
        except tokens.InvalidTokenError as exc:
            logger.warning("Refresh rejected: %s", exc)
            raise InvalidRefreshTokenError() from None

        user = await self.users.get_by_id(user_id)
        if user is None:
            logger.warning("Refresh rejected: user %s no longer exists", user_id)
            raise InvalidRefreshTokenError()
        if not user.is_active:
            logger.warning("Refresh rejected: inactive account %s", user_id)
            raise InvalidRefreshTokenError()
        if not _tokens_equal(refresh_token, user.refresh_token):
            logger.warning("Refresh rejected: superseded or revoked token for %s", user_id)
            raise InvalidRefreshTokenError()

        access_token = self._access_token_for(user)

        if not self.settings.ROTATE_REFRESH_TOKENS:
            return RefreshResult(access_token=access_token)

        new_refresh = self._refresh_token_for(user)
        swapped = await self.users.swap_refresh_token(user.id, refresh_token, new_refresh)
        if not swapped:
            logger.warning("Refresh rejected: token replaced concurrently for %s", user_id)
            raise InvalidRefreshTokenError()
        return RefreshResult(access_token=access_token, refresh_token=new_refresh)

    async def logout(self, user_id: str) -> None:
        if await self.users.get_by_id(user_id) is None:
            # Account deleted while its access token is still live
            logger.info("Logout for missing user %s ignored", user_id)
            return
        await self.users.set_refresh_token(user_id, None)
        await self.activity.log(user_id, "USER_LOGGED_OUT", "User", user_id)
        logger.info("User logged out: %s", user_id)

# backend/app/core/config.py
"""
Application configuration using pydantic-settings.

Security considerations:
- Access and refresh tokens are signed with two different secrets
- Development default secrets are rejected when ENVIRONMENT=production
- ENCRYPTION_KEY has no default; the app refuses to start without it
- Database URLs normalized for async drivers automatically
"""
import re
from datetime import timedelta
from functools import lru_cache
from typing import List, Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_ACCESS_SECRET = "INSECURE_DEV_ACCESS_SECRET_CHANGE_ME"
DEV_REFRESH_SECRET = "INSECURE_DEV_REFRESH_SECRET_CHANGE_ME"

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


def parse_duration(value: str) -> timedelta:
    """
    Parse a compact duration string such as "15m" or "7d".

    A bare number is read as seconds.

    Raises:
        ValueError: if the string is not <digits>[s|m|h|d] or is zero
    """
    match = _DURATION_RE.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r} (expected e.g. 15m, 12h, 7d)")
    amount, unit = int(match.group(1)), match.group(2)
    if amount <= 0:
        raise ValueError(f"Duration must be positive: {value!r}")
    return timedelta(**{_DURATION_UNITS[unit]: amount})


class Settings(BaseSettings):
    """
    Strictly typed application settings.

    Priority for loading:
    1. Environment variables (highest priority)
    2. .env file (via pydantic-settings)
    3. Default values (lowest priority, dev-safe only)
    """

    # ─────────────────────────────────────────────────────────────
    # Application metadata
    # ─────────────────────────────────────────────────────────────
    PROJECT_NAME: str = "Bankr"
    PROJECT_VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # ─────────────────────────────────────────────────────────────
    # Security: JWT Configuration
    # Refresh tokens use their own secret so an access token can
    # never be presented as a refresh token.
    # ─────────────────────────────────────────────────────────────
    JWT_ACCESS_SECRET: str = DEV_ACCESS_SECRET
    JWT_REFRESH_SECRET: str = DEV_REFRESH_SECRET
    ALGORITHM: str = "HS256"
    JWT_ACCESS_EXPIRY: str = "15m"
    JWT_REFRESH_EXPIRY: str = "7d"

    # Issue a new refresh token on every /auth/refresh call
    ROTATE_REFRESH_TOKENS: bool = False

    # ─────────────────────────────────────────────────────────────
    # Security: password hashing and field encryption
    # ─────────────────────────────────────────────────────────────
    BCRYPT_ROUNDS: int = 12
    ENCRYPTION_KEY: Optional[str] = None

    # ─────────────────────────────────────────────────────────────
    # Database Configuration
    # Priority: DATABASE_URL env var → SQLite fallback for local dev
    # ─────────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite+aiosqlite:///./bankr.db"
    DATABASE_ECHO: bool = False

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def normalize_database_url(cls, v: Optional[str]) -> str:
        """
        Normalize database URLs for async SQLAlchemy compatibility.

        Conversions:
        - postgres://     → postgresql+asyncpg://
        - postgresql://   → postgresql+asyncpg://
        - sqlite:///      → sqlite+aiosqlite:///
        """
        if v is None:
            return "sqlite+aiosqlite:///./bankr.db"

        url = v.strip()

        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)

        if url.startswith("postgresql://") and "+asyncpg" not in url:
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)

        if url.startswith("sqlite:///") and "+aiosqlite" not in url:
            return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)

        return url

    @field_validator("JWT_ACCESS_EXPIRY", "JWT_REFRESH_EXPIRY")
    @classmethod
    def validate_expiry(cls, v: str) -> str:
        parse_duration(v)
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        # bcrypt accepts log rounds in [4, 31]
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("ENCRYPTION_KEY", mode="before")
    @classmethod
    def blank_encryption_key_is_unset(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not str(v).strip():
            return None
        return v

    @model_validator(mode="after")
    def check_secrets(self) -> "Settings":
        if self.JWT_ACCESS_SECRET == self.JWT_REFRESH_SECRET:
            raise ValueError("JWT_ACCESS_SECRET and JWT_REFRESH_SECRET must differ")
        if self.is_production and (
            self.JWT_ACCESS_SECRET == DEV_ACCESS_SECRET
            or self.JWT_REFRESH_SECRET == DEV_REFRESH_SECRET
        ):
            raise ValueError("Development JWT secrets are not allowed in production")
        return self

    # ─────────────────────────────────────────────────────────────
    # CORS Configuration
    # Parsed from comma-separated CORS_ORIGINS env var
    # Empty string → empty list (NOT "*")
    # ─────────────────────────────────────────────────────────────
    CORS_ORIGINS: str = "http://localhost:5173,http://127.0.0.1:5173"

    @property
    def BACKEND_CORS_ORIGINS(self) -> List[str]:
        """Parse CORS_ORIGINS string into a list of allowed origins."""
        if not self.CORS_ORIGINS or not self.CORS_ORIGINS.strip():
            return []

        return [
            origin.strip()
            for origin in self.CORS_ORIGINS.split(",")
            if origin.strip()
        ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        # Extra fields in .env are ignored (prevents config injection)
        extra="ignore",
    )

    @property
    def access_token_ttl(self) -> timedelta:
        return parse_duration(self.JWT_ACCESS_EXPIRY)

    @property
    def refresh_token_ttl(self) -> timedelta:
        return parse_duration(self.JWT_REFRESH_EXPIRY)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite database (local development)."""
        return "sqlite" in self.DATABASE_URL.lower()


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings instance.

    Settings are loaded once per process so every module sees the
    same configuration.
    """
    return Settings()


# Most modules import `settings` directly from here
settings = get_settings()

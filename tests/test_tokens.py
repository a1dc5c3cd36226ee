"""Tests for access/refresh token issuance and verification."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from backend.app.core.config import Settings, settings
from backend.app.security import tokens
from backend.app.security.tokens import InvalidTokenError


def _sign(payload, secret=None):
    return jwt.encode(payload, secret or settings.JWT_ACCESS_SECRET, algorithm=settings.ALGORITHM)


class TestAccessTokens:
    def test_round_trip_claims(self):
        token = tokens.create_access_token("user-1", "a@b.com", "PREMIUM")
        claims = tokens.decode_access_token(token)
        assert claims.id == "user-1"
        assert claims.email == "a@b.com"
        assert claims.role == "PREMIUM"
        assert claims.expires_at > claims.issued_at

    def test_default_lifetime_is_fifteen_minutes(self):
        claims = tokens.decode_access_token(tokens.create_access_token("u", "a@b.com", "FREE"))
        assert claims.expires_at - claims.issued_at == timedelta(minutes=15)

    def test_expired_token_rejected(self):
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        token = _sign({
            "sub": "u", "email": "a@b.com", "role": "FREE", "type": "access",
            "iat": past, "exp": past + timedelta(minutes=15),
        })
        with pytest.raises(InvalidTokenError):
            tokens.decode_access_token(token)

    def test_forged_signature_rejected(self):
        now = datetime.now(timezone.utc)
        token = _sign(
            {"sub": "u", "email": "a@b.com", "role": "ADMIN", "type": "access",
             "iat": now, "exp": now + timedelta(minutes=5)},
            secret="attacker-secret",
        )
        with pytest.raises(InvalidTokenError):
            tokens.decode_access_token(token)

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed_token_rejected(self, token):
        with pytest.raises(InvalidTokenError):
            tokens.decode_access_token(token)

    def test_missing_claims_rejected(self):
        now = datetime.now(timezone.utc)
        token = _sign({"sub": "u", "type": "access", "iat": now, "exp": now + timedelta(minutes=5)})
        with pytest.raises(InvalidTokenError):
            tokens.decode_access_token(token)

    def test_refresh_token_is_not_an_access_token(self):
        refresh = tokens.create_refresh_token("user-1")
        with pytest.raises(InvalidTokenError):
            tokens.decode_access_token(refresh)


class TestRefreshTokens:
    def test_round_trip_subject(self):
        assert tokens.decode_refresh_token(tokens.create_refresh_token("user-1")) == "user-1"

    def test_tokens_issued_together_differ(self):
        assert tokens.create_refresh_token("user-1") != tokens.create_refresh_token("user-1")

    def test_access_token_is_not_a_refresh_token(self):
        access = tokens.create_access_token("user-1", "a@b.com", "FREE")
        with pytest.raises(InvalidTokenError):
            tokens.decode_refresh_token(access)

    def test_type_claim_checked_even_with_right_secret(self):
        now = datetime.now(timezone.utc)
        token = _sign(
            {"sub": "u", "type": "access", "iat": now, "exp": now + timedelta(days=1)},
            secret=settings.JWT_REFRESH_SECRET,
        )
        with pytest.raises(InvalidTokenError):
            tokens.decode_refresh_token(token)

    def test_lifetime_follows_settings(self):
        custom = Settings(
            JWT_ACCESS_SECRET="a-secret",
            JWT_REFRESH_SECRET="r-secret",
            JWT_REFRESH_EXPIRY="2h",
        )
        token = tokens.create_refresh_token("user-1", custom)
        payload = jwt.decode(token, "r-secret", algorithms=[custom.ALGORITHM])
        assert payload["exp"] - payload["iat"] == 2 * 3600
        assert tokens.decode_refresh_token(token, custom) == "user-1"
        with pytest.raises(InvalidTokenError):
            tokens.decode_refresh_token(token)

"""Unit tests for AuthService over the in-memory repositories."""

import pytest

from backend.app.core.config import Settings, settings
from backend.app.core.errors import (
    ErrorCode,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    MissingRefreshTokenError,
    UserExistsError,
)
from backend.app.security import hashing, tokens
from backend.app.services.auth import AuthService

PASSWORD = "Abcd1234"


async def test_register_creates_free_user_with_tokens(auth_service, user_repo, activity_repo):
    result = await auth_service.register("a@b.com", PASSWORD, first_name="Ada")

    assert result.user.role == "FREE"
    assert result.user.first_name == "Ada"
    assert result.user.password_hash != PASSWORD
    assert hashing.verify_password(PASSWORD, result.user.password_hash)
    assert result.access_token and result.refresh_token

    stored = await user_repo.get_by_id(result.user.id)
    assert stored.refresh_token == result.refresh_token
    assert [e.action for e in activity_repo.entries] == ["USER_REGISTERED"]


async def test_register_normalizes_email(auth_service):
    result = await auth_service.register("  User@Example.COM ", PASSWORD)
    assert result.user.email == "user@example.com"


async def test_register_rejects_any_case_variant(auth_service):
    await auth_service.register("User@Example.com", PASSWORD)
    for variant in ("user@example.com", "USER@EXAMPLE.COM", "uSeR@eXaMpLe.CoM"):
        with pytest.raises(UserExistsError) as exc_info:
            await auth_service.register(variant, PASSWORD)
        assert exc_info.value.status_code == 409
        assert exc_info.value.code == ErrorCode.USER_EXISTS


async def test_login_is_case_insensitive(auth_service):
    registered = await auth_service.register("User@Example.com", PASSWORD)
    result = await auth_service.login("user@example.com", PASSWORD)
    assert result.user.id == registered.user.id

    other = await auth_service.register("lower@example.com", PASSWORD)
    assert (await auth_service.login("LOWER@Example.com", PASSWORD)).user.id == other.user.id


async def test_login_failures_are_indistinguishable(auth_service, user_repo):
    registered = await auth_service.register("a@b.com", PASSWORD)

    with pytest.raises(InvalidCredentialsError) as unknown:
        await auth_service.login("nobody@b.com", PASSWORD)
    with pytest.raises(InvalidCredentialsError) as wrong:
        await auth_service.login("a@b.com", "Wrong1234")

    registered.user.is_active = False
    with pytest.raises(InvalidCredentialsError) as inactive:
        await auth_service.login("a@b.com", PASSWORD)

    outcomes = {
        (e.value.status_code, e.value.code, e.value.message)
        for e in (unknown, wrong, inactive)
    }
    assert outcomes == {(401, ErrorCode.INVALID_CREDENTIALS, "Invalid email or password")}


async def test_login_rotates_refresh_token(auth_service, activity_repo):
    await auth_service.register("a@b.com", PASSWORD)
    first = await auth_service.login("a@b.com", PASSWORD)
    second = await auth_service.login("a@b.com", PASSWORD)

    assert first.refresh_token != second.refresh_token

    with pytest.raises(InvalidRefreshTokenError):
        await auth_service.refresh(first.refresh_token)

    refreshed = await auth_service.refresh(second.refresh_token)
    assert tokens.decode_access_token(refreshed.access_token).email == "a@b.com"
    assert [e.action for e in activity_repo.entries].count("USER_LOGGED_IN") == 2


async def test_registration_token_superseded_by_login(auth_service):
    registered = await auth_service.register("a@b.com", PASSWORD)
    await auth_service.login("a@b.com", PASSWORD)
    with pytest.raises(InvalidRefreshTokenError):
        await auth_service.refresh(registered.refresh_token)


async def test_logout_revokes_unexpired_refresh_token(auth_service, user_repo, activity_repo):
    registered = await auth_service.register("a@b.com", PASSWORD)
    result = await auth_service.login("a@b.com", PASSWORD)

    await auth_service.logout(registered.user.id)

    assert (await user_repo.get_by_id(registered.user.id)).refresh_token is None
    # still cryptographically valid, but no longer the stored one
    assert tokens.decode_refresh_token(result.refresh_token) == registered.user.id
    with pytest.raises(InvalidRefreshTokenError):
        await auth_service.refresh(result.refresh_token)
    assert activity_repo.entries[-1].action == "USER_LOGGED_OUT"


async def test_refresh_does_not_rotate_by_default(auth_service):
    await auth_service.register("a@b.com", PASSWORD)
    result = await auth_service.login("a@b.com", PASSWORD)

    first = await auth_service.refresh(result.refresh_token)
    second = await auth_service.refresh(result.refresh_token)

    assert first.refresh_token is None
    assert second.access_token


@pytest.mark.parametrize("missing", [None, ""])
async def test_refresh_requires_token(auth_service, missing):
    with pytest.raises(MissingRefreshTokenError) as exc_info:
        await auth_service.refresh(missing)
    assert exc_info.value.status_code == 400


async def test_refresh_rejections_share_one_error(auth_service, user_repo):
    registered = await auth_service.register("a@b.com", PASSWORD)
    user_id = registered.user.id

    access_as_refresh = registered.access_token
    forged = tokens.create_refresh_token(
        user_id,
        Settings(JWT_ACCESS_SECRET="x-access", JWT_REFRESH_SECRET="x-refresh"),
    )
    unknown_user = tokens.create_refresh_token("no-such-user")

    for bad in ("garbage", access_as_refresh, forged, unknown_user):
        with pytest.raises(InvalidRefreshTokenError) as exc_info:
            await auth_service.refresh(bad)
        assert exc_info.value.message == "Invalid or expired refresh token"

    registered.user.is_active = False
    with pytest.raises(InvalidRefreshTokenError):
        await auth_service.refresh(registered.refresh_token)


async def test_refresh_uses_stored_role(auth_service, user_repo):
    registered = await auth_service.register("a@b.com", PASSWORD)
    await user_repo.update_profile(registered.user.id, role="PREMIUM")

    # the access token issued at registration still says FREE
    assert tokens.decode_access_token(registered.access_token).role == "FREE"
    refreshed = await auth_service.refresh(registered.refresh_token)
    assert tokens.decode_access_token(refreshed.access_token).role == "PREMIUM"


async def test_rotation_on_refresh_when_enabled(user_repo, activity_repo):
    rotating = settings.model_copy(update={"ROTATE_REFRESH_TOKENS": True})
    service = AuthService(user_repo, activity_repo, rotating)
    registered = await service.register("a@b.com", PASSWORD)

    result = await service.refresh(registered.refresh_token)
    assert result.refresh_token and result.refresh_token != registered.refresh_token

    # the presented token was consumed
    with pytest.raises(InvalidRefreshTokenError):
        await service.refresh(registered.refresh_token)
    assert (await service.refresh(result.refresh_token)).access_token

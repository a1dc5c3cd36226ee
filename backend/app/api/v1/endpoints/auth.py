# backend/app/api/v1/endpoints/auth.py
from typing import Optional

from fastapi import APIRouter, Depends, status

from backend.app.api import deps
from backend.app.models.user import User
from backend.app.schemas.common import ApiResponse, MessageResponse
from backend.app.schemas.token import TokenClaims
from backend.app.schemas.user import (
    AccessTokenResponse,
    AuthResponse,
    RefreshRequest,
    UserCreate,
    UserLogin,
    UserProfile,
    UserResponse,
)
from backend.app.services.auth import AuthResult, AuthService

router = APIRouter()


def _auth_payload(result: AuthResult) -> AuthResponse:
    return AuthResponse(
        user=UserResponse.model_validate(result.user),
        access_token=result.access_token,
        refresh_token=result.refresh_token,
    )


@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    user_in: UserCreate,
    auth: AuthService = Depends(deps.get_auth_service),
):
    result = await auth.register(
        user_in.email,
        user_in.password,
        first_name=user_in.first_name,
        last_name=user_in.last_name,
    )
    return ApiResponse(data=_auth_payload(result))


@router.post("/login", response_model=ApiResponse[AuthResponse])
async def login(
    credentials: UserLogin,
    auth: AuthService = Depends(deps.get_auth_service),
):
    result = await auth.login(credentials.email, credentials.password)
    return ApiResponse(data=_auth_payload(result))


@router.post(
    "/refresh",
    response_model=ApiResponse[AccessTokenResponse],
    # refreshToken is only sent when rotation is on
    response_model_exclude_none=True,
)
async def refresh(
    payload: Optional[RefreshRequest] = None,
    auth: AuthService = Depends(deps.get_auth_service),
):
    result = await auth.refresh(payload.refresh_token if payload else None)
    return ApiResponse(
        data=AccessTokenResponse(
            access_token=result.access_token,
            refresh_token=result.refresh_token,
        )
    )


@router.post("/logout", response_model=ApiResponse[MessageResponse])
async def logout(
    claims: TokenClaims = Depends(deps.get_current_claims),
    auth: AuthService = Depends(deps.get_auth_service),
):
    await auth.logout(claims.id)
    return ApiResponse(data=MessageResponse(message="Logged out successfully"))


@router.get("/me", response_model=ApiResponse[UserProfile])
async def read_me(current_user: User = Depends(deps.get_current_user)):
    return ApiResponse(data=UserProfile.model_validate(current_user))

# backend/app/api/v1/endpoints/users.py
from typing import List

from fastapi import APIRouter, Depends

from backend.app.api import deps
from backend.app.core.errors import UserNotFoundError
from backend.app.models.user import UserRole
from backend.app.repositories.users import UserRepository
from backend.app.schemas.common import ApiResponse, MessageResponse
from backend.app.schemas.token import TokenClaims
from backend.app.schemas.user import UserAdminView, UserProfile, UserUpdate

router = APIRouter()


# Admin only: every account, including inactive ones
@router.get("/", response_model=ApiResponse[List[UserAdminView]])
async def list_users(
    _: TokenClaims = Depends(deps.require_role(UserRole.ADMIN)),
    users: UserRepository = Depends(deps.get_user_repository),
):
    rows = await users.list_all()
    return ApiResponse(data=[UserAdminView.model_validate(u) for u in rows])


@router.put("/me", response_model=ApiResponse[UserProfile])
async def update_me(
    user_in: UserUpdate,
    claims: TokenClaims = Depends(deps.get_current_claims),
    users: UserRepository = Depends(deps.get_user_repository),
):
    user = await users.update_profile(claims.id, **user_in.model_dump(exclude_unset=True))
    if user is None:
        raise UserNotFoundError()
    return ApiResponse(data=UserProfile.model_validate(user))


@router.delete("/me", response_model=ApiResponse[MessageResponse])
async def delete_me(
    claims: TokenClaims = Depends(deps.get_current_claims),
    users: UserRepository = Depends(deps.get_user_repository),
):
    if not await users.delete(claims.id):
        raise UserNotFoundError()
    return ApiResponse(data=MessageResponse(message="Account deleted successfully"))

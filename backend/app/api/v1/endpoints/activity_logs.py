# backend/app/api/v1/endpoints/activity_logs.py
from typing import List

from fastapi import APIRouter, Depends, Query

from backend.app.api import deps
from backend.app.repositories.activity import ActivityLogRepository
from backend.app.schemas.activity import ActivityLogResponse
from backend.app.schemas.common import ApiResponse, PageMeta
from backend.app.schemas.token import TokenClaims

router = APIRouter()


@router.get("/", response_model=ApiResponse[List[ActivityLogResponse]])
async def read_activity_logs(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    claims: TokenClaims = Depends(deps.get_current_claims),
    activity: ActivityLogRepository = Depends(deps.get_activity_repository),
):
    logs, total = await activity.list_for_user(
        claims.id, offset=(page - 1) * limit, limit=limit
    )
    return ApiResponse(
        data=[ActivityLogResponse.model_validate(entry) for entry in logs],
        meta=PageMeta(page=page, limit=limit, total=total),
    )

# backend/app/api/crud.py
"""
Router factory for the per-user planning records (budgets, goals, loans,
subscriptions, scheduled payments).

Each generated router exposes:

    GET    /        paginated list, meta {page, limit, total}
    GET    /{id}    one record, 404 NOT_FOUND if missing or someone else's
    POST   /        create, 201
    PUT    /{id}    partial update
    DELETE /{id}    delete

Every write leaves an activity row: CREATED_<ACTION>, UPDATED_<ACTION>,
DELETED_<ACTION>.
"""
from enum import Enum
from typing import Any, List, Type

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api import deps
from backend.app.core.errors import NotFoundError
from backend.app.db.base import Base, get_db
from backend.app.repositories.activity import ActivityLogRepository
from backend.app.repositories.owned import OwnedRepository
from backend.app.schemas.common import ApiResponse, MessageResponse, PageMeta
from backend.app.schemas.token import TokenClaims


def column_values(data: dict) -> dict:
    return {key: value.value if isinstance(value, Enum) else value for key, value in data.items()}


def build_owned_router(
    *,
    model: Type[Base],
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    response_schema: Type[BaseModel],
    entity: str,
    action: str,
    label: str,
    order_by: Any = None,
) -> APIRouter:
    router = APIRouter()
    not_found = f"{label} not found"

    def get_repository(db: AsyncSession = Depends(get_db)) -> OwnedRepository:
        return OwnedRepository(db, model, order_by)

    @router.get("/", response_model=ApiResponse[List[response_schema]])
    async def read_items(
        page: int = Query(1, ge=1),
        limit: int = Query(20, ge=1, le=100),
        claims: TokenClaims = Depends(deps.get_current_claims),
        items: OwnedRepository = Depends(get_repository),
    ):
        rows, total = await items.list_for_user(
            claims.id, offset=(page - 1) * limit, limit=limit
        )
        return ApiResponse(
            data=[response_schema.model_validate(row) for row in rows],
            meta=PageMeta(page=page, limit=limit, total=total),
        )

    @router.get("/{item_id}", response_model=ApiResponse[response_schema])
    async def read_item(
        item_id: str,
        claims: TokenClaims = Depends(deps.get_current_claims),
        items: OwnedRepository = Depends(get_repository),
    ):
        item = await items.get(claims.id, item_id)
        if item is None:
            raise NotFoundError(not_found)
        return ApiResponse(data=response_schema.model_validate(item))

    @router.post(
        "/",
        response_model=ApiResponse[response_schema],
        status_code=status.HTTP_201_CREATED,
    )
    async def create_item(
        item_in: create_schema,
        claims: TokenClaims = Depends(deps.get_owner_claims),
        items: OwnedRepository = Depends(get_repository),
        activity: ActivityLogRepository = Depends(deps.get_activity_repository),
    ):
        # Omitted optional fields fall back to the column defaults
        values = column_values(item_in.model_dump(exclude_none=True))
        item = await items.create(claims.id, values)
        await activity.log(claims.id, f"CREATED_{action}", entity, item.id)
        return ApiResponse(data=response_schema.model_validate(item))

    @router.put("/{item_id}", response_model=ApiResponse[response_schema])
    async def update_item(
        item_id: str,
        item_in: update_schema,
        claims: TokenClaims = Depends(deps.get_owner_claims),
        items: OwnedRepository = Depends(get_repository),
        activity: ActivityLogRepository = Depends(deps.get_activity_repository),
    ):
        item = await items.get(claims.id, item_id)
        if item is None:
            raise NotFoundError(not_found)
        item = await items.update(item, column_values(item_in.model_dump(exclude_unset=True)))
        await activity.log(claims.id, f"UPDATED_{action}", entity, item.id)
        return ApiResponse(data=response_schema.model_validate(item))

    @router.delete("/{item_id}", response_model=ApiResponse[MessageResponse])
    async def delete_item(
        item_id: str,
        claims: TokenClaims = Depends(deps.get_owner_claims),
        items: OwnedRepository = Depends(get_repository),
        activity: ActivityLogRepository = Depends(deps.get_activity_repository),
    ):
        item = await items.get(claims.id, item_id)
        if item is None:
            raise NotFoundError(not_found)
        await items.delete(item)
        await activity.log(claims.id, f"DELETED_{action}", entity, item_id)
        return ApiResponse(data=MessageResponse(message=f"{label} deleted successfully"))

    return router

# backend/app/api/v1/endpoints/transactions.py
"""
Transaction CRUD, scoped to the authenticated user.

`notes` may hold sensitive free text; it is stored as an encrypted
envelope (security/encryption.py) and decrypted only when returned to
its owner. Key derivation is CPU-bound, so both directions run in the
threadpool.
"""
import calendar
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from backend.app.api import deps
from backend.app.core.errors import NotFoundError
from backend.app.db.base import get_db
from backend.app.models.transaction import Transaction
from backend.app.repositories.activity import ActivityLogRepository
from backend.app.repositories.transactions import TransactionRepository
from backend.app.schemas.common import ApiResponse, MessageResponse, PageMeta
from backend.app.schemas.token import TokenClaims
from backend.app.schemas.transaction import (
    Category,
    TransactionCreate,
    TransactionResponse,
    TransactionSummary,
    TransactionType,
    TransactionUpdate,
)
from backend.app.security import encryption

router = APIRouter()

_MONTHS = {name.lower(): index for index, name in enumerate(calendar.month_name) if name}


def get_transaction_repository(db: AsyncSession = Depends(get_db)) -> TransactionRepository:
    return TransactionRepository(db)


def _month_range(month: Optional[str], year: Optional[int]) -> Tuple[Optional[datetime], Optional[datetime]]:
    """[first day of month, first day of next month) for e.g. ("March", 2025)."""
    if not month or not year:
        return None, None
    index = _MONTHS.get(month.strip().lower())
    if index is None:
        return None, None
    start = datetime(year, index, 1, tzinfo=timezone.utc)
    end = datetime(year + 1, 1, 1, tzinfo=timezone.utc) if index == 12 else datetime(year, index + 1, 1, tzinfo=timezone.utc)
    return start, end


async def _to_response(item: Transaction) -> TransactionResponse:
    notes = None
    if item.notes_encrypted:
        notes = await run_in_threadpool(encryption.decrypt, item.notes_encrypted)
    response = TransactionResponse.model_validate(item)
    response.notes = notes
    return response


async def _column_values(data: dict) -> dict:
    """Map validated input onto model columns, sealing notes on the way."""
    values = {}
    for key, value in data.items():
        if key == "notes":
            values["notes_encrypted"] = (
                await run_in_threadpool(encryption.encrypt, value) if value else None
            )
        elif isinstance(value, (TransactionType, Category)):
            values[key] = value.value
        else:
            values[key] = value
    return values


@router.get("/", response_model=ApiResponse[List[TransactionResponse]])
async def read_transactions(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    type: Optional[TransactionType] = None,
    category: Optional[Category] = None,
    month: Optional[str] = None,
    year: Optional[int] = Query(None, ge=1900, le=9999),
    claims: TokenClaims = Depends(deps.get_current_claims),
    transactions: TransactionRepository = Depends(get_transaction_repository),
):
    date_from, date_to = _month_range(month, year)
    rows, total = await transactions.list_for_user(
        claims.id,
        offset=(page - 1) * limit,
        limit=limit,
        type=type.value if type else None,
        category=category.value if category else None,
        date_from=date_from,
        date_to=date_to,
    )
    return ApiResponse(
        data=[await _to_response(row) for row in rows],
        meta=PageMeta(page=page, limit=limit, total=total),
    )


# Declared before /{transaction_id} so "export" and "stats" are not taken for ids
@router.get("/export", response_model=ApiResponse[List[TransactionResponse]])
async def export_transactions(
    claims: TokenClaims = Depends(deps.require_premium),
    transactions: TransactionRepository = Depends(get_transaction_repository),
):
    rows, _ = await transactions.list_for_user(claims.id, limit=None)
    return ApiResponse(data=[await _to_response(row) for row in rows])


@router.get("/stats/summary", response_model=ApiResponse[TransactionSummary])
async def read_transaction_summary(
    claims: TokenClaims = Depends(deps.get_current_claims),
    transactions: TransactionRepository = Depends(get_transaction_repository),
):
    totals = await transactions.totals_by_type(claims.id)
    income = totals.get(TransactionType.INCOME.value, (Decimal("0"), 0))[0]
    expenses = totals.get(TransactionType.EXPENSE.value, (Decimal("0"), 0))[0]
    # TRANSFER rows count toward the total but not the balance
    return ApiResponse(
        data=TransactionSummary(
            total_income=income,
            total_expenses=expenses,
            balance=income - expenses,
            transaction_count=sum(count for _, count in totals.values()),
        )
    )

@router.get("/{transaction_id}", response_model=ApiResponse[TransactionResponse])
async def read_transaction(
    transaction_id: str,
    claims: TokenClaims = Depends(deps.get_current_claims),
    transactions: TransactionRepository = Depends(get_transaction_repository),
):
    item = await transactions.get(claims.id, transaction_id)
    if item is None:
        raise NotFoundError("Transaction not found")
    return ApiResponse(data=await _to_response(item))


@router.post(
    "/",
    response_model=ApiResponse[TransactionResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_transaction(
    item_in: TransactionCreate,
    claims: TokenClaims = Depends(deps.get_owner_claims),
    transactions: TransactionRepository = Depends(get_transaction_repository),
    activity: ActivityLogRepository = Depends(deps.get_activity_repository),
):
    values = await _column_values(item_in.model_dump())
    if values.get("date") is None:
        values["date"] = datetime.now(timezone.utc)
    item = await transactions.create(claims.id, values)

    await activity.log(
        claims.id,
        "CREATED_TRANSACTION",
        "Transaction",
        item.id,
        f"Created {item.type} transaction of {item.amount}",
    )
    return ApiResponse(data=await _to_response(item))


@router.put("/{transaction_id}", response_model=ApiResponse[TransactionResponse])
async def update_transaction(
    transaction_id: str,
    item_in: TransactionUpdate,
    claims: TokenClaims = Depends(deps.get_owner_claims),
    transactions: TransactionRepository = Depends(get_transaction_repository),
    activity: ActivityLogRepository = Depends(deps.get_activity_repository),
):
    item = await transactions.get(claims.id, transaction_id)
    if item is None:
        raise NotFoundError("Transaction not found")

    values = await _column_values(item_in.model_dump(exclude_unset=True))
    item = await transactions.update(item, values)

    await activity.log(claims.id, "UPDATED_TRANSACTION", "Transaction", item.id)
    return ApiResponse(data=await _to_response(item))


@router.delete("/{transaction_id}", response_model=ApiResponse[MessageResponse])
async def delete_transaction(
    transaction_id: str,
    claims: TokenClaims = Depends(deps.get_owner_claims),
    transactions: TransactionRepository = Depends(get_transaction_repository),
    activity: ActivityLogRepository = Depends(deps.get_activity_repository),
):
    item = await transactions.get(claims.id, transaction_id)
    if item is None:
        raise NotFoundError("Transaction not found")

    await transactions.delete(item)
    await activity.log(claims.id, "DELETED_TRANSACTION", "Transaction", transaction_id)
    return ApiResponse(data=MessageResponse(message="Transaction deleted successfully"))

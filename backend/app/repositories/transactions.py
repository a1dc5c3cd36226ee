# backend/app/repositories/transactions.py
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.models.transaction import Transaction
from backend.app.repositories.owned import OwnedRepository


class TransactionRepository(OwnedRepository):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Transaction, Transaction.date.desc())

    def _scoped(self, user_id: str, **filters: Any):
        conditions = [Transaction.user_id == user_id]
        if filters.get("type"):
            conditions.append(Transaction.type == filters["type"])
        if filters.get("category"):
            conditions.append(Transaction.category == filters["category"])
        if filters.get("date_from") is not None:
            conditions.append(Transaction.date >= filters["date_from"])
        if filters.get("date_to") is not None:
            conditions.append(Transaction.date < filters["date_to"])
        return conditions

    async def list_for_user(
        self,
        user_id: str,
        *,
        offset: int = 0,
        limit: Optional[int] = 20,
        type: Optional[str] = None,
        category: Optional[str] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> Tuple[List[Transaction], int]:
        conditions = self._scoped(
            user_id, type=type, category=category, date_from=date_from, date_to=date_to
        )
        return await self._page(conditions, offset, limit)

    async def totals_by_type(self, user_id: str) -> Dict[str, Tuple[Decimal, int]]:
        """{type: (sum of amounts, number of rows)} for one user."""
        result = await self.db.execute(
            select(Transaction.type, func.sum(Transaction.amount), func.count())
            .where(Transaction.user_id == user_id)
            .group_by(Transaction.type)
        )
        return {
            row_type: (Decimal(str(total or 0)), count)
            for row_type, total, count in result.all()
        }

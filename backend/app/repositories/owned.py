# backend/app/repositories/owned.py
"""
Data access for records that belong to one user.

Every query is filtered by user_id, so a record id from another account
reads as missing.
"""
from typing import Any, Dict, List, Optional, Tuple, Type

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.base import Base


class OwnedRepository:
    def __init__(self, db: AsyncSession, model: Type[Base], order_by=None) -> None:
        self.db = db
        self.model = model
        self.order_by = order_by if order_by is not None else model.created_at.desc()

    async def list_for_user(
        self, user_id: str, *, offset: int = 0, limit: Optional[int] = 20
    ) -> Tuple[List[Any], int]:
        return await self._page([self.model.user_id == user_id], offset, limit)

    async def _page(self, conditions: list, offset: int, limit: Optional[int]) -> Tuple[List[Any], int]:
        query = select(self.model).where(*conditions).order_by(self.order_by).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        rows = (await self.db.execute(query)).scalars().all()
        total = await self.db.scalar(
            select(func.count()).select_from(self.model).where(*conditions)
        )
        return list(rows), int(total or 0)

    async def get(self, user_id: str, record_id: str) -> Optional[Any]:
        result = await self.db.execute(
            select(self.model).where(self.model.id == record_id, self.model.user_id == user_id)
        )
        return result.scalars().first()

    async def create(self, user_id: str, values: Dict[str, Any]) -> Any:
        item = self.model(user_id=user_id, **values)
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)
        return item

    async def update(self, item: Any, values: Dict[str, Any]) -> Any:
        for key, value in values.items():
            setattr(item, key, value)
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)
        return item

    async def delete(self, item: Any) -> None:
        await self.db.delete(item)
        await self.db.commit()

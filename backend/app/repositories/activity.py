# backend/app/repositories/activity.py
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.models.activity_log import ActivityLog


class ActivityLogRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def log(
        self,
        user_id: str,
        action: str,
        entity: str,
        entity_id: Optional[str] = None,
        details: Optional[str] = None,
    ) -> ActivityLog:
        entry = ActivityLog(
            user_id=user_id,
            action=action,
            entity=entity,
            entity_id=entity_id,
            details=details,
        )
        self.db.add(entry)
        await self.db.commit()
        return entry

    async def list_for_user(
        self, user_id: str, *, offset: int = 0, limit: int = 50
    ) -> Tuple[List[ActivityLog], int]:
        query = (
            select(ActivityLog)
            .where(ActivityLog.user_id == user_id)
            .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
            .offset(offset)
            .limit(limit)
        )
        rows = (await self.db.execute(query)).scalars().all()
        total = await self.db.scalar(
            select(func.count()).select_from(ActivityLog).where(ActivityLog.user_id == user_id)
        )
        return list(rows), int(total or 0)

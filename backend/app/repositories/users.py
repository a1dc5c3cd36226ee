# backend/app/repositories/users.py
"""
Credential store backed by SQLAlchemy.

Refresh-token writes are single UPDATE statements so concurrent logins
resolve by last write wins at the row level, without read-modify-write
in the application.
"""
from typing import List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.models import OWNED_MODELS, ActivityLog, User


class DuplicateEmailError(Exception):
    """An account with this email already exists."""


class UserRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalars().first()

    async def get_by_id(self, user_id: str) -> Optional[User]:
        # populate_existing: always take the row as stored now,
        # not whatever this session loaded earlier
        result = await self.db.execute(
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def create(self, user: User) -> User:
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateEmailError(user.email) from None
        await self.db.refresh(user)
        return user

    async def set_refresh_token(self, user_id: str, token: Optional[str]) -> None:
        await self.db.execute(
            update(User).where(User.id == user_id).values(refresh_token=token)
        )
        await self.db.commit()

    async def swap_refresh_token(self, user_id: str, expected: str, new_token: str) -> bool:
        """Replace the stored token only if it still equals `expected`."""
        result = await self.db.execute(
            update(User)
            .where(User.id == user_id, User.refresh_token == expected)
            .values(refresh_token=new_token)
        )
        await self.db.commit()
        return result.rowcount == 1

    async def update_profile(self, user_id: str, **fields) -> Optional[User]:
        if fields:
            await self.db.execute(update(User).where(User.id == user_id).values(**fields))
            await self.db.commit()
        return await self.get_by_id(user_id)

    async def list_all(self) -> List[User]:
        result = await self.db.execute(select(User).order_by(User.created_at))
        return list(result.scalars().all())

    async def delete(self, user_id: str) -> bool:
        # Explicit child deletes: SQLite only cascades with PRAGMA foreign_keys
        await self.db.execute(delete(ActivityLog).where(ActivityLog.user_id == user_id))
        for model in OWNED_MODELS:
            await self.db.execute(delete(model).where(model.user_id == user_id))
        result = await self.db.execute(delete(User).where(User.id == user_id))
        await self.db.commit()
        return result.rowcount == 1

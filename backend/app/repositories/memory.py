# backend/app/repositories/memory.py
"""
In-memory stand-ins for the user and activity repositories.

Same async interface as the SQLAlchemy repositories, used to exercise
AuthService without a database.
"""
import itertools
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from backend.app.models.activity_log import ActivityLog
from backend.app.models.user import User
from backend.app.repositories.users import DuplicateEmailError


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryUserRepository:
    def __init__(self) -> None:
        self._users: Dict[str, User] = {}

    async def get_by_email(self, email: str) -> Optional[User]:
        wanted = email.strip().lower()
        for user in self._users.values():
            if user.email.lower() == wanted:
                return user
        return None

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    async def create(self, user: User) -> User:
        if await self.get_by_email(user.email) is not None:
            raise DuplicateEmailError(user.email)
        if user.role is None:
            user.role = "FREE"
        if user.is_active is None:
            user.is_active = True
        if user.email_verified is None:
            user.email_verified = False
        user.created_at = user.updated_at = _now()
        self._users[user.id] = user
        return user

    async def set_refresh_token(self, user_id: str, token: Optional[str]) -> None:
        user = self._users.get(user_id)
        if user is not None:
            user.refresh_token = token

    async def swap_refresh_token(self, user_id: str, expected: str, new_token: str) -> bool:
        user = self._users.get(user_id)
        if user is None or user.refresh_token != expected:
            return False
        user.refresh_token = new_token
        return True

    async def update_profile(self, user_id: str, **fields) -> Optional[User]:
        user = self._users.get(user_id)
        if user is None:
            return None
        for key, value in fields.items():
            setattr(user, key, value)
        user.updated_at = _now()
        return user

    async def list_all(self) -> List[User]:
        return list(self._users.values())

    async def delete(self, user_id: str) -> bool:
        return self._users.pop(user_id, None) is not None


class MemoryActivityLogRepository:
    def __init__(self) -> None:
        self.entries: List[ActivityLog] = []
        self._ids = itertools.count(1)

    async def log(
        self,
        user_id: str,
        action: str,
        entity: str,
        entity_id: Optional[str] = None,
        details: Optional[str] = None,
    ) -> ActivityLog:
        entry = ActivityLog(
            id=next(self._ids),
            user_id=user_id,
            action=action,
            entity=entity,
            entity_id=entity_id,
            details=details,
            created_at=_now(),
        )
        self.entries.append(entry)
        return entry

    async def list_for_user(
        self, user_id: str, *, offset: int = 0, limit: int = 50
    ) -> Tuple[List[ActivityLog], int]:
        mine = [e for e in reversed(self.entries) if e.user_id == user_id]
        return mine[offset:offset + limit], len(mine)

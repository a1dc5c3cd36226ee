# backend/app/schemas/activity.py
from datetime import datetime
from typing import Optional

from backend.app.schemas.common import CamelModel


class ActivityLogResponse(CamelModel):
    id: int
    action: str
    entity: str
    entity_id: Optional[str] = None
    details: Optional[str] = None
    created_at: Optional[datetime] = None

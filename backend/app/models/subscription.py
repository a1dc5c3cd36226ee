# backend/app/models/subscription.py
import uuid

from sqlalchemy import Column, String, Text, ForeignKey, DateTime, Numeric
from sqlalchemy.sql import func

from backend.app.db.base import Base


class Subscription(Base):
    __tablename__ = "subscriptions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    name = Column(String(255), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    frequency = Column(String(16), nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    next_billing = Column(DateTime(timezone=True), nullable=False, index=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    category = Column(String(32), nullable=True)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

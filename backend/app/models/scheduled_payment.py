# backend/app/models/scheduled_payment.py
import uuid

from sqlalchemy import Column, String, Text, ForeignKey, DateTime, Boolean, Numeric
from sqlalchemy.sql import func

from backend.app.db.base import Base


class ScheduledPayment(Base):
    __tablename__ = "scheduled_payments"

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
    next_date = Column(DateTime(timezone=True), nullable=False, index=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    category = Column(String(32), nullable=True)
    auto_execute = Column(Boolean, nullable=False, default=False)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

# backend/app/models/budget.py
import uuid

from sqlalchemy import Column, String, ForeignKey, DateTime, Integer, Numeric
from sqlalchemy.sql import func

from backend.app.db.base import Base


class Budget(Base):
    __tablename__ = "budgets"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    category = Column(String(32), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    # WEEKLY, MONTHLY or YEARLY
    period = Column(String(16), nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=True)
    # Percentage of the amount at which the client warns
    alert_at = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

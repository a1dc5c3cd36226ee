# backend/app/models/loan.py
import uuid

from sqlalchemy import Column, String, Text, ForeignKey, DateTime, Numeric
from sqlalchemy.sql import func

from backend.app.db.base import Base


class Loan(Base):
    __tablename__ = "loans"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    name = Column(String(255), nullable=False)
    # lent (money owed to the user) or borrowed (owed by the user)
    type = Column(String(16), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    color = Column(String(32), nullable=True)
    notes = Column(Text, nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

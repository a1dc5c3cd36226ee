# backend/app/models/transaction.py
import uuid

from sqlalchemy import Column, String, Text, ForeignKey, DateTime, Boolean, Numeric
from sqlalchemy.sql import func

from backend.app.db.base import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    # INCOME, EXPENSE or TRANSFER
    type = Column(String(16), nullable=False)
    category = Column(String(32), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)

    description = Column(String(255), nullable=True)
    merchant = Column(String(255), nullable=True)
    date = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)

    # Encrypted envelope (salt:iv:authTag:ciphertext); see security/encryption.py
    notes_encrypted = Column(Text, nullable=True)

    is_recurring = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

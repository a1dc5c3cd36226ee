# backend/app/schemas/scheduled_payment.py
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from backend.app.schemas.common import CamelModel, reject_null
from backend.app.schemas.transaction import Category


class PaymentFrequency(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"


class ScheduledPaymentCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    frequency: PaymentFrequency
    next_date: datetime
    end_date: Optional[datetime] = None
    category: Optional[Category] = None
    auto_execute: bool = False
    description: Optional[str] = None


class ScheduledPaymentUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    frequency: Optional[PaymentFrequency] = None
    next_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    category: Optional[Category] = None
    auto_execute: Optional[bool] = None
    description: Optional[str] = None

    @field_validator("name", "amount", "frequency", "next_date", "auto_execute")
    @classmethod
    def required_columns(cls, v):
        return reject_null(v)


class ScheduledPaymentResponse(CamelModel):
    id: str
    name: str
    amount: Decimal
    frequency: str
    next_date: datetime
    end_date: Optional[datetime] = None
    category: Optional[str] = None
    auto_execute: bool
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

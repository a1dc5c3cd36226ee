# backend/app/schemas/subscription.py
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from backend.app.schemas.common import CamelModel, reject_null
from backend.app.schemas.transaction import Category


class BillingFrequency(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"


class SubscriptionCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    frequency: BillingFrequency
    start_date: datetime
    next_billing: datetime
    end_date: Optional[datetime] = None
    category: Optional[Category] = None
    description: Optional[str] = None


class SubscriptionUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    frequency: Optional[BillingFrequency] = None
    start_date: Optional[datetime] = None
    next_billing: Optional[datetime] = None
    end_date: Optional[datetime] = None
    category: Optional[Category] = None
    description: Optional[str] = None

    @field_validator("name", "amount", "frequency", "start_date", "next_billing")
    @classmethod
    def required_columns(cls, v):
        return reject_null(v)


class SubscriptionResponse(CamelModel):
    id: str
    name: str
    amount: Decimal
    frequency: str
    start_date: datetime
    next_billing: datetime
    end_date: Optional[datetime] = None
    category: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

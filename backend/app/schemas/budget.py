# backend/app/schemas/budget.py
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from backend.app.schemas.common import CamelModel, reject_null
from backend.app.schemas.transaction import Category


class BudgetPeriod(str, Enum):
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class BudgetCreate(CamelModel):
    category: Category
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    period: BudgetPeriod
    start_date: datetime
    end_date: Optional[datetime] = None
    alert_at: Optional[int] = Field(None, ge=0, le=100)


class BudgetUpdate(CamelModel):
    category: Optional[Category] = None
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    period: Optional[BudgetPeriod] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    alert_at: Optional[int] = Field(None, ge=0, le=100)

    @field_validator("category", "amount", "period", "start_date")
    @classmethod
    def required_columns(cls, v):
        return reject_null(v)


class BudgetResponse(CamelModel):
    id: str
    category: str
    amount: Decimal
    period: str
    start_date: datetime
    end_date: Optional[datetime] = None
    alert_at: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

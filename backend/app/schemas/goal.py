# backend/app/schemas/goal.py
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from backend.app.schemas.common import CamelModel, reject_null


class GoalType(str, Enum):
    SAVINGS = "SAVINGS"
    EXPENSE = "EXPENSE"


class GoalCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: GoalType = GoalType.SAVINGS
    color: Optional[str] = Field(None, max_length=32)
    target_amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    current_amount: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    deadline: Optional[datetime] = None
    description: Optional[str] = None


class GoalUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[GoalType] = None
    color: Optional[str] = Field(None, max_length=32)
    target_amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    current_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    deadline: Optional[datetime] = None
    description: Optional[str] = None

    @field_validator("name", "type", "target_amount", "current_amount", "start_date")
    @classmethod
    def required_columns(cls, v):
        return reject_null(v)


class GoalResponse(CamelModel):
    id: str
    name: str
    type: str
    color: Optional[str] = None
    target_amount: Decimal
    current_amount: Decimal
    start_date: datetime
    end_date: Optional[datetime] = None
    deadline: Optional[datetime] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

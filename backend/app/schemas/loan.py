# backend/app/schemas/loan.py
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator, model_validator

from backend.app.schemas.common import CamelModel, reject_null


class LoanType(str, Enum):
    LENT = "lent"
    BORROWED = "borrowed"


class LoanCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: LoanType
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    color: Optional[str] = Field(None, max_length=32)
    notes: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @model_validator(mode="after")
    def end_after_start(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date must be after the start date")
        return self


class LoanUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[LoanType] = None
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    color: Optional[str] = Field(None, max_length=32)
    notes: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator("name", "type", "amount")
    @classmethod
    def required_columns(cls, v):
        return reject_null(v)


class LoanResponse(CamelModel):
    id: str
    name: str
    type: str
    amount: Decimal
    color: Optional[str] = None
    notes: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# backend/app/schemas/transaction.py
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from backend.app.schemas.common import CamelModel, reject_null


class TransactionType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    TRANSFER = "TRANSFER"


class Category(str, Enum):
    FOOD = "FOOD"
    TRANSPORT = "TRANSPORT"
    TRANSPORTATION = "TRANSPORTATION"
    SHOPPING = "SHOPPING"
    ENTERTAINMENT = "ENTERTAINMENT"
    BILLS = "BILLS"
    UTILITIES = "UTILITIES"
    HEALTHCARE = "HEALTHCARE"
    EDUCATION = "EDUCATION"
    HOUSING = "HOUSING"
    TRAVEL = "TRAVEL"
    GIFTS = "GIFTS"
    TECHNOLOGY = "TECHNOLOGY"
    LIFESTYLE = "LIFESTYLE"
    CLOTHING = "CLOTHING"
    SALARY = "SALARY"
    BUSINESS = "BUSINESS"
    INVESTMENT = "INVESTMENT"
    INVESTMENTS = "INVESTMENTS"
    FREELANCE = "FREELANCE"
    CASH = "CASH"
    SAVINGS = "SAVINGS"
    OTHER = "OTHER"


class TransactionCreate(CamelModel):
    type: TransactionType
    category: Category
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    description: Optional[str] = Field(None, max_length=255)
    merchant: Optional[str] = Field(None, max_length=255)
    date: Optional[datetime] = None
    notes: Optional[str] = None
    is_recurring: bool = False


class TransactionUpdate(CamelModel):
    type: Optional[TransactionType] = None
    category: Optional[Category] = None
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    description: Optional[str] = Field(None, max_length=255)
    merchant: Optional[str] = Field(None, max_length=255)
    date: Optional[datetime] = None
    notes: Optional[str] = None
    is_recurring: Optional[bool] = None

    @field_validator("type", "category", "amount", "date", "is_recurring")
    @classmethod
    def required_columns(cls, v):
        return reject_null(v)


class TransactionResponse(CamelModel):
    id: str
    type: str
    category: str
    amount: Decimal
    description: Optional[str] = None
    merchant: Optional[str] = None
    date: datetime
    # Decrypted from notes_encrypted before the response is built
    notes: Optional[str] = None
    is_recurring: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TransactionSummary(CamelModel):
    total_income: Decimal
    total_expenses: Decimal
    balance: Decimal
    transaction_count: int

# backend/app/schemas/common.py
"""
Response envelope shared by every endpoint.

Success: {"success": true, "data": ..., "meta": {...}?}
Failure: {"success": false, "error": {"message", "code", "details"?}}
"""
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Serializes as camelCase, accepts both camelCase and snake_case input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PageMeta(BaseModel):
    page: int
    limit: int
    total: int


class ErrorBody(BaseModel):
    message: str
    code: str
    details: Optional[Any] = None


class ApiResponse(BaseModel, Generic[DataT]):
    success: bool = True
    data: Optional[DataT] = None
    meta: Optional[PageMeta] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: ErrorBody


class MessageResponse(BaseModel):
    message: str


def reject_null(value):
    """For partial updates: a field may be omitted but not set to null."""
    if value is None:
        raise ValueError("Field cannot be null")
    return value

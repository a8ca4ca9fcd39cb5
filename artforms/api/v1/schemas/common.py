"""
Shared schema pieces: camelCase wire format and the common response envelope.

Every response, successful or not, has the shape
``{success, message?, data?, errors?, pagination?}``.

Reference: https://docs.pydantic.dev/latest/concepts/alias/#alias-generator
"""

import math
from typing import Generic, List, Optional, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
)
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """
    Base schema serialised with camelCase keys (artistName, isForSale, ...).

    populate_by_name lets services build instances with snake_case names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Pagination(CamelModel):
    """Pagination block attached to list responses."""

    current: int = Field(..., ge=1, description="Current page (1-based)")
    pages: int = Field(..., ge=0, description="Total pages = ceil(total / limit)")
    total: int = Field(..., ge=0, description="Total matching documents")
    limit: int = Field(..., ge=1, description="Page size")

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(current=page, pages=math.ceil(total / limit), total=total, limit=limit)


class FieldError(CamelModel):
    """One violated field constraint."""

    field: str
    message: str


class ApiResponse(CamelModel, Generic[T]):
    """Common response envelope."""

    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None
    pagination: Optional[Pagination] = None

    @model_serializer(mode="wrap")
    def _omit_absent(self, handler: SerializerFunctionWrapHandler):
        """Leave out envelope keys that were not set (message, data, pagination)."""
        return {key: value for key, value in handler(self).items() if value is not None}


class ErrorResponse(CamelModel):
    """Envelope returned for every failure."""

    success: bool = False
    message: str
    errors: Optional[List[FieldError]] = None

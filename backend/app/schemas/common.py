"""
Response envelope shared by every endpoint.
"""

from typing import Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire; both accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PaginationMeta(CamelModel):
    """Pagination block of a list response."""
    page: int
    page_size: int
    total_items: int
    total_pages: int


class FieldError(BaseModel):
    """One failed field of a validation error."""
    field: str
    message: str


class ApiResponse(CamelModel, Generic[DataT]):
    """Uniform envelope: {status, data?, message?, pagination?}."""
    status: Literal["success", "error"] = "success"
    data: Optional[DataT] = None
    message: Optional[str] = None
    pagination: Optional[PaginationMeta] = None


class ErrorResponse(BaseModel):
    """Error envelope, documented for OpenAPI."""
    status: Literal["error"] = "error"
    message: str
    errors: Optional[List[FieldError]] = None

"""
Client Pydantic schemas for request/response validation.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.schemas.common import CamelModel


class ClientBase(CamelModel):
    """Optional contact and billing fields shared by create and update."""
    phone: Optional[str] = Field(None, max_length=50)
    company: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    tax_id: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = None


class ClientCreate(ClientBase):
    """Schema for creating a client. Ownership comes from the token, never the body."""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr


class ClientUpdate(ClientBase):
    """Schema for updating a client (all fields optional)."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    is_active: Optional[bool] = None

    @field_validator("name", "email", "is_active", mode="before")
    @classmethod
    def reject_explicit_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class ClientResponse(CamelModel):
    """Schema for client response."""
    id: str
    user_id: str
    name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    tax_id: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

"""
Client schemas for request/response validation.
"""

from pydantic import EmailStr, Field

from app.schemas.base import BaseSchema, RecordSchema, ListResponse


class ClientBase(BaseSchema):
    """Base client schema."""

    first_name: str = Field(..., min_length=1, max_length=120)
    last_name: str = Field(default="", max_length=120)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    address: str | None = None
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)
    notes: str | None = None


class ClientCreate(ClientBase):
    """Schema for creating a client."""
    pass


class ClientUpdate(BaseSchema):
    """Schema for updating a client. All fields optional."""

    first_name: str | None = Field(None, min_length=1, max_length=120)
    last_name: str | None = Field(None, max_length=120)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    address: str | None = None
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)
    notes: str | None = None


class ClientResponse(ClientBase, RecordSchema):
    """Client response schema."""

    email: str | None = None
    full_name: str


class ClientListResponse(ListResponse):
    """Paginated client list response."""

    items: list[ClientResponse]

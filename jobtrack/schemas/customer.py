"""Schemas for customer endpoints."""

from pydantic import BaseModel, Field


class CustomerRequest(BaseModel):
    """Fields accepted on create and full update."""

    name: str = Field(..., min_length=1, max_length=255)
    phone: str | None = Field(default=None, max_length=64)
    email: str | None = Field(default=None, max_length=255)
    address: str | None = Field(default=None, max_length=1024)


class CustomerResponse(BaseModel):
    id: int
    name: str
    phone: str | None = None
    email: str | None = None
    address: str | None = None

    class Config:
        from_attributes = True

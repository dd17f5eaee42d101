"""Schemas for job and revenue endpoints."""

from datetime import date

from pydantic import BaseModel, Field

from jobtrack.models.job import DEFAULT_SERVICE


class JobRequest(BaseModel):
    """
    Fields accepted on create and full update.

    Set customer_id to link an existing customer; otherwise customer_name and
    address describe a one-off customer.
    """

    service: str | None = Field(default=None, max_length=255)
    job_date: date | None = None
    price: float | None = Field(default=None, ge=0)
    notes: str | None = None
    customer_id: int | None = None
    customer_name: str | None = Field(default=None, max_length=255)
    address: str | None = Field(default=None, max_length=1024)
    paid: bool = False


class JobResponse(BaseModel):
    """Job as shown to its owner; customer fields come from the linked customer when set."""

    id: int
    service: str = DEFAULT_SERVICE
    customer_id: int | None = None
    customer_name: str | None = None
    address: str | None = None
    job_date: date | None = None
    price: float | None = None
    notes: str | None = None
    paid: bool = False
    invoice_number: str | None = None


class RevenueMonth(BaseModel):
    """Paid and unpaid totals for one calendar month (YYYY-MM)."""

    month: str = Field(..., pattern=r"^\d{4}-\d{2}$")
    paid: float = 0.0
    unpaid: float = 0.0

"""Pydantic request/response schemas."""

from jobtrack.schemas.auth import CredentialsRequest, IdentityResponse, TokenResponse
from jobtrack.schemas.customer import CustomerRequest, CustomerResponse
from jobtrack.schemas.health import HealthResponse
from jobtrack.schemas.job import JobRequest, JobResponse, RevenueMonth

__all__ = [
    "CredentialsRequest",
    "CustomerRequest",
    "CustomerResponse",
    "HealthResponse",
    "IdentityResponse",
    "JobRequest",
    "JobResponse",
    "RevenueMonth",
    "TokenResponse",
]

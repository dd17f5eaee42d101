"""Job routes, including mark-paid and monthly revenue."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from jobtrack.core.database import get_db
from jobtrack.core.principal import Principal, current_principal
from jobtrack.schemas.job import JobRequest, JobResponse, RevenueMonth
from jobtrack.services import jobs as service

router = APIRouter()

DbSession = Annotated[Session, Depends(get_db)]
CurrentPrincipal = Annotated[Principal, Depends(current_principal)]


@router.get("", response_model=list[JobResponse])
def list_jobs(principal: CurrentPrincipal, db: DbSession) -> list[JobResponse]:
    return [service.to_response(j) for j in service.list_jobs(db, principal)]


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def create_job(body: JobRequest, principal: CurrentPrincipal, db: DbSession) -> JobResponse:
    """
    Create a job. Link an existing customer with customer_id, or describe a
    one-off customer with customer_name and address.
    """
    return service.to_response(service.create_job(db, principal, body))


@router.get("/revenue", response_model=list[RevenueMonth])
def get_revenue(principal: CurrentPrincipal, db: DbSession) -> list[RevenueMonth]:
    """Paid and unpaid totals per month (YYYY-MM), oldest first."""
    return service.revenue_for(db, principal)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, principal: CurrentPrincipal, db: DbSession) -> JobResponse:
    return service.to_response(service.get_job(db, principal, job_id))


@router.put("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: int, body: JobRequest, principal: CurrentPrincipal, db: DbSession
) -> JobResponse:
    return service.to_response(service.update_job(db, principal, job_id, body))


@router.patch("/{job_id}/mark-paid", response_model=JobResponse)
def mark_job_paid(job_id: int, principal: CurrentPrincipal, db: DbSession) -> JobResponse:
    """Mark a job as paid and assign its invoice number (INV-<id>)."""
    return service.to_response(service.mark_job_paid(db, principal, job_id))


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job(job_id: int, principal: CurrentPrincipal, db: DbSession) -> Response:
    service.delete_job(db, principal, job_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Job CRUD, payment marking and monthly revenue, scoped to the requesting account."""

import logging
from collections import defaultdict

from sqlalchemy.orm import Session

from jobtrack.core.principal import Principal
from jobtrack.models import Customer, Job
from jobtrack.models.job import DEFAULT_SERVICE
from jobtrack.schemas.job import JobRequest, JobResponse, RevenueMonth
from jobtrack.services.ownership import get_owned, owned_query

logger = logging.getLogger(__name__)

INVOICE_PREFIX = "INV-"


def invoice_number_for(job_id: int) -> str:
    return f"{INVOICE_PREFIX}{job_id}"


def to_response(job: Job) -> JobResponse:
    """Build the read model; a linked customer overrides the manual-entry fields."""
    customer = job.customer
    return JobResponse(
        id=job.id,
        service=job.service or DEFAULT_SERVICE,
        customer_id=job.customer_id,
        customer_name=customer.name if customer is not None else job.customer_name,
        address=customer.address if customer is not None else job.address,
        job_date=job.job_date,
        price=job.price,
        notes=job.notes,
        paid=bool(job.paid),
        invoice_number=job.invoice_number,
    )


def _apply_request(db: Session, principal: Principal, job: Job, body: JobRequest) -> None:
    """Copy request fields onto job. A linked customer must belong to principal."""
    job.service = body.service or DEFAULT_SERVICE
    job.job_date = body.job_date
    job.price = body.price
    job.notes = body.notes
    if body.customer_id is not None:
        get_owned(db, Customer, body.customer_id, principal)
        job.customer_id = body.customer_id
        job.customer_name = None
        job.address = None
    else:
        job.customer_id = None
        job.customer_name = body.customer_name
        job.address = body.address


def list_jobs(db: Session, principal: Principal) -> list[Job]:
    return owned_query(db, Job, principal).order_by(Job.id).all()


def get_job(db: Session, principal: Principal, job_id: int) -> Job:
    return get_owned(db, Job, job_id, principal)


def create_job(db: Session, principal: Principal, body: JobRequest) -> Job:
    job = Job(owner_id=principal.id, paid=body.paid)
    _apply_request(db, principal, job, body)
    db.add(job)
    db.flush()
    if job.paid:
        job.invoice_number = invoice_number_for(job.id)
    db.commit()
    db.refresh(job)
    return job


def update_job(db: Session, principal: Principal, job_id: int, body: JobRequest) -> Job:
    """Replace the editable fields of a job. Payment state is changed only by mark_job_paid."""
    job = get_owned(db, Job, job_id, principal)
    _apply_request(db, principal, job, body)
    db.commit()
    db.refresh(job)
    return job


def mark_job_paid(db: Session, principal: Principal, job_id: int) -> Job:
    job = get_owned(db, Job, job_id, principal)
    job.paid = True
    job.invoice_number = invoice_number_for(job.id)
    db.commit()
    db.refresh(job)
    logger.info("Job marked paid", extra={"job_id": job.id, "owner_id": principal.id})
    return job


def delete_job(db: Session, principal: Principal, job_id: int) -> None:
    job = get_owned(db, Job, job_id, principal)
    db.delete(job)
    db.commit()


def monthly_revenue(jobs: list[Job]) -> list[RevenueMonth]:
    """
    Sum job prices per YYYY-MM, split into paid and unpaid.

    Jobs without a date are skipped; a missing price counts as 0.
    """
    totals: dict[str, list[float]] = defaultdict(lambda: [0.0, 0.0])
    for job in jobs:
        if job.job_date is None:
            continue
        month = job.job_date.strftime("%Y-%m")
        totals[month][0 if job.paid else 1] += job.price or 0.0
    return [
        RevenueMonth(month=month, paid=paid, unpaid=unpaid)
        for month, (paid, unpaid) in sorted(totals.items())
    ]


def revenue_for(db: Session, principal: Principal) -> list[RevenueMonth]:
    jobs = owned_query(db, Job, principal).filter(Job.job_date.isnot(None)).all()
    return monthly_revenue(jobs)

"""SQLAlchemy ORM models."""

from jobtrack.models.base import Base
from jobtrack.models.customer import Customer
from jobtrack.models.job import Job
from jobtrack.models.user import User

__all__ = ["Base", "Customer", "Job", "User"]

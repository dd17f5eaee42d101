"""ORM model for service jobs."""

from sqlalchemy import Boolean, Column, Date, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from jobtrack.models.base import Base

DEFAULT_SERVICE = "Window Cleaning"


class Job(Base):
    """
    A job done for a customer.

    Either linked to a Customer (customer_id) or entered manually with
    customer_name and address. owner_id is the account that created it.
    """

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    service = Column(String(255), nullable=False, default=DEFAULT_SERVICE)
    job_date = Column(Date, nullable=True, index=True)
    price = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
    customer_name = Column(String(255), nullable=True)
    address = Column(String(1024), nullable=True)
    paid = Column(Boolean, nullable=False, default=False)
    invoice_number = Column(String(64), nullable=True)
    customer_id = Column(
        Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=True, index=True
    )
    owner_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    customer = relationship("Customer", back_populates="jobs")
    owner = relationship("User", back_populates="jobs")

"""ORM model for application accounts."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from jobtrack.models.base import Base


class User(Base):
    """
    Account that owns customers and jobs.

    username is unique and case-sensitive and is not changed after creation.
    role is a single implicit role today; roles exposes it as a set.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user")

    customers = relationship("Customer", back_populates="owner", cascade="all, delete-orphan")
    jobs = relationship("Job", back_populates="owner", cascade="all, delete-orphan")

    @property
    def roles(self) -> frozenset[str]:
        return frozenset({self.role or "user"})

"""Customer CRUD, always scoped to the requesting account."""

from sqlalchemy.orm import Session

from jobtrack.core.principal import Principal
from jobtrack.models import Customer
from jobtrack.schemas.customer import CustomerRequest
from jobtrack.services.ownership import get_owned, owned_query


def list_customers(db: Session, principal: Principal) -> list[Customer]:
    return owned_query(db, Customer, principal).order_by(Customer.id).all()


def get_customer(db: Session, principal: Principal, customer_id: int) -> Customer:
    return get_owned(db, Customer, customer_id, principal)


def create_customer(db: Session, principal: Principal, body: CustomerRequest) -> Customer:
    customer = Customer(**body.model_dump(), owner_id=principal.id)
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


def update_customer(
    db: Session, principal: Principal, customer_id: int, body: CustomerRequest
) -> Customer:
    customer = get_owned(db, Customer, customer_id, principal)
    for field, value in body.model_dump().items():
        setattr(customer, field, value)
    db.commit()
    db.refresh(customer)
    return customer


def delete_customer(db: Session, principal: Principal, customer_id: int) -> None:
    """Delete a customer and its linked jobs."""
    customer = get_owned(db, Customer, customer_id, principal)
    db.delete(customer)
    db.commit()

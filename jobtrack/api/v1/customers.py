"""Customer routes. Every route requires a principal and sees only its own customers."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from jobtrack.core.database import get_db
from jobtrack.core.principal import Principal, current_principal
from jobtrack.schemas.customer import CustomerRequest, CustomerResponse
from jobtrack.services import customers as service

router = APIRouter()

DbSession = Annotated[Session, Depends(get_db)]
CurrentPrincipal = Annotated[Principal, Depends(current_principal)]


@router.get("", response_model=list[CustomerResponse])
def list_customers(principal: CurrentPrincipal, db: DbSession) -> list[CustomerResponse]:
    return [
        CustomerResponse.model_validate(c) for c in service.list_customers(db, principal)
    ]


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(
    body: CustomerRequest, principal: CurrentPrincipal, db: DbSession
) -> CustomerResponse:
    return CustomerResponse.model_validate(service.create_customer(db, principal, body))


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: int, principal: CurrentPrincipal, db: DbSession
) -> CustomerResponse:
    return CustomerResponse.model_validate(service.get_customer(db, principal, customer_id))


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: int, body: CustomerRequest, principal: CurrentPrincipal, db: DbSession
) -> CustomerResponse:
    return CustomerResponse.model_validate(
        service.update_customer(db, principal, customer_id, body)
    )


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(customer_id: int, principal: CurrentPrincipal, db: DbSession) -> Response:
    """Delete a customer together with its linked jobs."""
    service.delete_customer(db, principal, customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

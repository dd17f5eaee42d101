"""Owner scoping for customers and jobs.

Every read or write of an owned row goes through owned_query, so the
owner_id filter cannot be forgotten at a call site.
"""

from typing import TypeVar

from sqlalchemy.orm import Query, Session

from jobtrack.core.errors import NotFoundOrForbidden
from jobtrack.core.principal import Principal
from jobtrack.models import Customer, Job

OwnedModel = TypeVar("OwnedModel", Customer, Job)


def owned_query(db: Session, model: type[OwnedModel], principal: Principal) -> Query:
    """Query on model restricted to rows owned by principal."""
    return db.query(model).filter(model.owner_id == principal.id)


def get_owned(
    db: Session, model: type[OwnedModel], row_id: int, principal: Principal
) -> OwnedModel:
    """Fetch one owned row. Absent and foreign rows raise the same NotFoundOrForbidden."""
    row = owned_query(db, model, principal).filter(model.id == row_id).first()
    if row is None:
        raise NotFoundOrForbidden()
    return row

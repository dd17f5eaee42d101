"""Request-scoped authentication state and the principal guard."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from fastapi import Request

from jobtrack.core.errors import Unauthenticated

if TYPE_CHECKING:
    from jobtrack.models.user import User


@dataclass(frozen=True)
class Principal:
    """Authenticated identity attached to one request."""

    id: int
    username: str
    roles: frozenset[str]

    @classmethod
    def from_account(cls, account: "User") -> "Principal":
        return cls(id=account.id, username=account.username, roles=account.roles)


@dataclass(frozen=True)
class Anonymous:
    """No usable credential was presented."""


@dataclass(frozen=True)
class Authenticated:
    principal: Principal


AuthState = Union[Anonymous, Authenticated]

ANONYMOUS = Anonymous()


def require_principal(auth: AuthState | None) -> Principal:
    """Return the principal, or raise Unauthenticated for anything else."""
    if isinstance(auth, Authenticated):
        return auth.principal
    raise Unauthenticated()


def current_principal(request: Request) -> Principal:
    """Dependency: the principal installed by RequestAuthenticator. Raises 401 if absent."""
    return require_principal(getattr(request.state, "auth", ANONYMOUS))

"""Registration, login and identity routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobtrack.api.v1.deps import get_password_hasher, get_token_codec
from jobtrack.core.database import get_db
from jobtrack.core.principal import Principal, current_principal
from jobtrack.core.security import PasswordHasher, TokenCodec
from jobtrack.schemas.auth import CredentialsRequest, IdentityResponse, TokenResponse
from jobtrack.services.accounts import (
    CredentialAuthenticator,
    PrincipalDirectory,
    register_account,
)

router = APIRouter()


@router.post("/register", response_model=IdentityResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: CredentialsRequest,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> IdentityResponse:
    """Create an account. Returns 409 if the username is already taken."""
    user = register_account(db, hasher, body.username, body.password)
    return IdentityResponse(id=user.id, username=user.username)


@router.post("/login", response_model=TokenResponse)
def login(
    body: CredentialsRequest,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> TokenResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    authenticator = CredentialAuthenticator(PrincipalDirectory(db), hasher)
    user = authenticator.authenticate(body.username, body.password)
    return TokenResponse(access_token=codec.issue(user.username), token_type="bearer")


@router.get("/me", response_model=IdentityResponse)
def me(
    principal: Annotated[Principal, Depends(current_principal)],
) -> IdentityResponse:
    """Return the id and username of the authenticated account."""
    return IdentityResponse(id=principal.id, username=principal.username)

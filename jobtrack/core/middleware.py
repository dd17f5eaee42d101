"""Bearer-token middleware: binds each request to at most one principal."""

import logging
from collections.abc import Callable

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware

from jobtrack.core.principal import ANONYMOUS, Authenticated, AuthState, Principal
from jobtrack.core.security import TokenCodec
from jobtrack.services.accounts import PrincipalDirectory

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an 'Authorization: Bearer <token>' header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        return None
    token = token.strip()
    return token or None


class RequestAuthenticator(BaseHTTPMiddleware):
    """
    Resolve the bearer token of every request into request.state.auth.

    Missing, invalid, expired and stale-subject tokens all leave the request
    anonymous; the request is never rejected here. Routes that need an
    identity call require_principal.
    """

    def __init__(
        self,
        app,
        token_codec: TokenCodec,
        session_factory: Callable[[], Session],
    ) -> None:
        super().__init__(app)
        self.token_codec = token_codec
        self.session_factory = session_factory

    async def dispatch(self, request: Request, call_next):
        request.state.auth = await self.authenticate(request)
        return await call_next(request)

    async def authenticate(self, request: Request) -> AuthState:
        token = extract_bearer_token(request.headers.get("authorization"))
        if token is None:
            return ANONYMOUS
        subject = self.token_codec.validate(token)
        if subject is None:
            return ANONYMOUS
        try:
            principal = await run_in_threadpool(self._resolve, subject)
        except SQLAlchemyError:
            logger.exception("Account lookup failed; treating request as anonymous")
            return ANONYMOUS
        if principal is None:
            logger.info("Valid token for unknown account; treating request as anonymous")
            return ANONYMOUS
        return Authenticated(principal)

    def _resolve(self, subject: str) -> Principal | None:
        db = self.session_factory()
        try:
            account = PrincipalDirectory(db).find_by_username(subject)
            return Principal.from_account(account) if account is not None else None
        finally:
            db.close()

"""Auth and ownership errors, and the HTTP handlers that render them.

Every handler returns a fixed, generic detail. Callers never learn whether a
username exists, why a token was refused, or whether a resource belongs to
someone else.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class JobtrackError(Exception):
    """Base class for service errors surfaced to HTTP callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCredentials(JobtrackError):
    """Login failed; same error for unknown username and wrong password."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid username or password."


class UsernameTaken(JobtrackError):
    """Registration conflict on an existing username."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Username already taken"


class Unauthenticated(JobtrackError):
    """No valid principal where one is required."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class NotFoundOrForbidden(JobtrackError):
    """Resource absent or owned by another account; deliberately one outcome."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class MalformedToken(Exception):
    """Raised inside TokenCodec only; never leaves TokenCodec.validate."""


async def _jobtrack_error_handler(request: Request, exc: JobtrackError) -> JSONResponse:
    headers = None
    if isinstance(exc, (Unauthenticated, InvalidCredentials)):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map service errors to JSON responses."""
    app.add_exception_handler(JobtrackError, _jobtrack_error_handler)

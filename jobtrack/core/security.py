"""Password hashing and bearer-token signing/validation.

Both classes hold only immutable configuration and are shared by every
request without locking.
"""

import logging
import math
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from jobtrack.core.errors import MalformedToken

logger = logging.getLogger(__name__)

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 1
PASSWORD_MAX_LEN = 128

# bcrypt only looks at the first 72 bytes of the secret.
BCRYPT_MAX_BYTES = 72

REQUIRED_CLAIMS = ("sub", "iat", "exp")


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Salted one-way hashing with bcrypt."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage; a new salt is drawn every call."""
        return bcrypt.hashpw(
            _password_bytes(plain_password), bcrypt.gensalt(rounds=self.rounds)
        ).decode("utf-8")

    def verify(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash. Malformed hashes never match."""
        try:
            return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            return False


class TokenCodec:
    """
    Issue and validate signed JWT bearer tokens carrying {sub, iat, exp}.

    The secret is passed in at construction. Expiry is checked against the
    codec's own clock so that validation is deterministic under test.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(minutes=60),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("TokenCodec requires a non-empty secret")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl
        self._clock = clock

    def issue(self, subject: str) -> str:
        """Create a token for subject that expires ttl from now."""
        now = self._clock()
        payload: dict[str, Any] = {
            "sub": subject,
            "iat": int(now.timestamp()),
            # Rounded up so no token dies before issued-at + ttl.
            "exp": math.ceil((now + self.ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def _decode(self, token: str) -> dict[str, Any]:
        """Verify signature and structure; raise MalformedToken on any failure."""
        if not isinstance(token, str) or not token:
            raise MalformedToken("empty token")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={
                    "require": list(REQUIRED_CLAIMS),
                    # exp is compared against self._clock below.
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except (jwt.PyJWTError, ValueError, TypeError) as e:
            raise MalformedToken(str(e)) from e
        if not isinstance(payload, dict):
            raise MalformedToken("payload is not an object")
        return payload

    def validate(self, token: str) -> str | None:
        """
        Return the subject of a valid, unexpired token, else None.

        Never raises: this runs on every request with untrusted input.
        """
        try:
            payload = self._decode(token)
        except MalformedToken as e:
            logger.debug("Rejected bearer token: %s", e)
            return None
        sub = payload.get("sub")
        exp = payload.get("exp")
        if not isinstance(sub, str) or not sub:
            logger.debug("Rejected bearer token: invalid subject")
            return None
        if not isinstance(exp, (int, float)) or isinstance(exp, bool):
            logger.debug("Rejected bearer token: invalid exp")
            return None
        if exp <= self._clock().timestamp():
            logger.debug("Rejected bearer token: expired")
            return None
        return sub

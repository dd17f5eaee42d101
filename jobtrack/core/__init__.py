"""Core app configuration, database and authentication primitives."""

from jobtrack.core.config import Settings, get_settings
from jobtrack.core.database import get_db
from jobtrack.core.security import PasswordHasher, TokenCodec

__all__ = ["PasswordHasher", "Settings", "TokenCodec", "get_db", "get_settings"]

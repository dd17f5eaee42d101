"""Shared builders for tests: settings, in-memory database, app and accounts."""

from datetime import UTC, datetime

from fastapi import FastAPI
from pydantic import SecretStr
from sqlalchemy.orm import Session, sessionmaker

from jobtrack.core.config import Settings
from jobtrack.core.database import build_engine, build_session_factory
from jobtrack.core.principal import Principal
from jobtrack.core.security import PasswordHasher
from jobtrack.main import create_app
from jobtrack.models import Base, User
from jobtrack.services.accounts import register_account

TEST_SECRET = "test-secret-0123456789abcdef0123456789abcdef"
# bcrypt's minimum cost keeps the suite fast.
TEST_BCRYPT_ROUNDS = 4


class FixedClock:
    """Callable clock for TokenCodec; move it with advance()."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta) -> None:
        self.now = self.now + delta


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "APP_ENV": "dev",
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": SecretStr(TEST_SECRET),
        "JWT_EXPIRE_MINUTES": 60,
        "BCRYPT_ROUNDS": TEST_BCRYPT_ROUNDS,
    }
    values.update(overrides)
    return Settings(**values)


def make_session_factory(database_url: str = "sqlite://") -> sessionmaker[Session]:
    """Fresh database with all tables created."""
    engine = build_engine(database_url)
    Base.metadata.create_all(engine)
    return build_session_factory(engine)


def make_app(**overrides: object) -> tuple[FastAPI, sessionmaker[Session]]:
    session_factory = make_session_factory()
    return create_app(make_settings(**overrides), session_factory=session_factory), session_factory


def make_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=TEST_BCRYPT_ROUNDS)


def add_account(db: Session, username: str, password: str = "pw") -> User:
    return register_account(db, make_hasher(), username, password)


def principal_for(user: User) -> Principal:
    return Principal.from_account(user)

"""Account lookup, registration and credential checks."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobtrack.core.errors import InvalidCredentials, UsernameTaken
from jobtrack.core.security import PasswordHasher
from jobtrack.models.user import User

logger = logging.getLogger(__name__)


class PrincipalDirectory:
    """Read-only account lookups on one session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()

    def find_by_id(self, user_id: int) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()


class CredentialAuthenticator:
    """
    Check a username/password pair.

    Unknown usernames and wrong passwords raise the same InvalidCredentials,
    and both paths run one bcrypt verification so response time does not
    reveal which one happened.
    """

    def __init__(self, directory: PrincipalDirectory, hasher: PasswordHasher) -> None:
        self.directory = directory
        self.hasher = hasher

    def authenticate(self, username: str, password: str) -> User:
        account = self.directory.find_by_username(username)
        if account is None:
            self.hasher.verify(password, _dummy_hash(self.hasher))
            logger.info("Login failed", extra={"username": username[:255]})
            raise InvalidCredentials()
        if not self.hasher.verify(password, account.password_hash):
            logger.info("Login failed", extra={"username": username[:255]})
            raise InvalidCredentials()
        return account


_DUMMY_HASHES: dict[int, str] = {}


def _dummy_hash(hasher: PasswordHasher) -> str:
    """Hash with the same cost as real accounts, computed once per cost."""
    digest = _DUMMY_HASHES.get(hasher.rounds)
    if digest is None:
        digest = hasher.hash("jobtrack-timing-equalizer")
        _DUMMY_HASHES[hasher.rounds] = digest
    return digest


def register_account(
    db: Session, hasher: PasswordHasher, username: str, password: str
) -> User:
    """
    Create an account, or raise UsernameTaken.

    The unique index on users.username is the final arbiter: a concurrent
    insert that wins the race makes this one fail on commit, and the session
    is rolled back so no partial account remains.
    """
    if PrincipalDirectory(db).find_by_username(username) is not None:
        logger.info("Registration rejected: username taken")
        raise UsernameTaken()
    user = User(username=username, password_hash=hasher.hash(password), role="user")
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Registration rejected: username taken (concurrent insert)")
        raise UsernameTaken() from e
    db.refresh(user)
    logger.info("Registered account", extra={"user_id": user.id})
    return user

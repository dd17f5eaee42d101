"""
Create an account from the command line. Run from project root:
  python -m jobtrack.scripts.create_user USERNAME PASSWORD
"""
import argparse
import logging
import sys

from jobtrack.core.config import get_settings
from jobtrack.core.database import build_engine, build_session_factory
from jobtrack.core.errors import UsernameTaken
from jobtrack.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    PasswordHasher,
)
from jobtrack.services.accounts import register_account


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Jobtrack account.")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars, case-sensitive)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s %(message)s")

    if not args.username or len(args.username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    session_factory = build_session_factory(build_engine(settings.DATABASE_URL))
    db = session_factory()
    try:
        user = register_account(
            db, PasswordHasher(rounds=settings.BCRYPT_ROUNDS), args.username, args.password
        )
    except UsernameTaken:
        print(f"User '{args.username}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' with id {user.id}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

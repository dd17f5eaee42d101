"""Tests for jobtrack.services.accounts: registration, lookup and credential checks."""

import os
import tempfile
import threading
import unittest
from unittest.mock import MagicMock, patch

from jobtrack.core.errors import InvalidCredentials, UsernameTaken
from jobtrack.models import User
from jobtrack.services.accounts import (
    CredentialAuthenticator,
    PrincipalDirectory,
    register_account,
)
from tests.support import add_account, make_hasher, make_session_factory


class TestRegisterAccount(unittest.TestCase):
    """register_account creates exactly one account per username."""

    def setUp(self) -> None:
        self.db = make_session_factory()()

    def tearDown(self) -> None:
        self.db.close()

    def test_creates_account_with_hashed_password(self) -> None:
        user = register_account(self.db, make_hasher(), "alice", "pw1")
        self.assertIsNotNone(user.id)
        self.assertEqual(user.username, "alice")
        self.assertNotEqual(user.password_hash, "pw1")
        self.assertTrue(make_hasher().verify("pw1", user.password_hash))
        self.assertEqual(user.roles, frozenset({"user"}))

    def test_duplicate_username_rejected_without_new_row(self) -> None:
        register_account(self.db, make_hasher(), "alice", "pw1")
        with self.assertRaises(UsernameTaken):
            register_account(self.db, make_hasher(), "alice", "pw2")
        self.assertEqual(self.db.query(User).filter(User.username == "alice").count(), 1)

    def test_usernames_are_case_sensitive(self) -> None:
        register_account(self.db, make_hasher(), "alice", "pw1")
        other = register_account(self.db, make_hasher(), "Alice", "pw2")
        self.assertEqual(other.username, "Alice")
        self.assertEqual(self.db.query(User).count(), 2)

    def test_lost_race_maps_unique_violation_to_username_taken(self) -> None:
        """The pre-check passes but the insert hits the unique index."""
        register_account(self.db, make_hasher(), "alice", "pw1")
        with patch.object(PrincipalDirectory, "find_by_username", return_value=None):
            with self.assertRaises(UsernameTaken):
                register_account(self.db, make_hasher(), "alice", "pw2")
        self.assertEqual(self.db.query(User).filter(User.username == "alice").count(), 1)
        stored = self.db.query(User).filter(User.username == "alice").one()
        self.assertTrue(make_hasher().verify("pw1", stored.password_hash))


class TestConcurrentRegistration(unittest.TestCase):
    """Two simultaneous registrations of one username: one success, one UsernameTaken."""

    def test_exactly_one_success(self) -> None:
        fd, path = tempfile.mkstemp(suffix=".db")
        os.close(fd)
        self.addCleanup(os.remove, path)
        session_factory = make_session_factory(f"sqlite:///{path}")
        self.addCleanup(session_factory.kw["bind"].dispose)

        barrier = threading.Barrier(2)
        outcomes: list[str] = []
        lock = threading.Lock()

        def register(password: str) -> None:
            db = session_factory()
            try:
                barrier.wait()
                register_account(db, make_hasher(), "alice", password)
                result = "ok"
            except UsernameTaken:
                result = "taken"
            finally:
                db.close()
            with lock:
                outcomes.append(result)

        threads = [threading.Thread(target=register, args=(pw,)) for pw in ("pw1", "pw2")]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=30)

        self.assertEqual(sorted(outcomes), ["ok", "taken"])
        db = session_factory()
        try:
            self.assertEqual(db.query(User).filter(User.username == "alice").count(), 1)
        finally:
            db.close()


class TestPrincipalDirectory(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.alice = add_account(self.db, "alice")

    def tearDown(self) -> None:
        self.db.close()

    def test_find_by_username(self) -> None:
        directory = PrincipalDirectory(self.db)
        self.assertEqual(directory.find_by_username("alice").id, self.alice.id)
        self.assertIsNone(directory.find_by_username("ALICE"))
        self.assertIsNone(directory.find_by_username("ghost"))

    def test_find_by_id(self) -> None:
        directory = PrincipalDirectory(self.db)
        self.assertEqual(directory.find_by_id(self.alice.id).username, "alice")
        self.assertIsNone(directory.find_by_id(self.alice.id + 100))


class TestCredentialAuthenticator(unittest.TestCase):
    """Unknown users and wrong passwords fail identically."""

    def setUp(self) -> None:
        self.db = make_session_factory()()
        add_account(self.db, "alice", "pw1")
        self.authenticator = CredentialAuthenticator(PrincipalDirectory(self.db), make_hasher())

    def tearDown(self) -> None:
        self.db.close()

    def test_success_returns_account(self) -> None:
        account = self.authenticator.authenticate("alice", "pw1")
        self.assertEqual(account.username, "alice")

    def test_unknown_user_and_wrong_password_are_indistinguishable(self) -> None:
        with self.assertRaises(InvalidCredentials) as ghost:
            self.authenticator.authenticate("ghost", "anything")
        with self.assertRaises(InvalidCredentials) as wrong:
            self.authenticator.authenticate("alice", "wrong")
        self.assertIs(type(ghost.exception), type(wrong.exception))
        self.assertEqual(ghost.exception.message, wrong.exception.message)
        self.assertEqual(ghost.exception.status_code, wrong.exception.status_code)

    def test_username_match_is_case_sensitive(self) -> None:
        with self.assertRaises(InvalidCredentials):
            self.authenticator.authenticate("Alice", "pw1")

    def test_unknown_user_still_runs_one_verification(self) -> None:
        hasher = MagicMock(wraps=make_hasher())
        hasher.rounds = 4
        authenticator = CredentialAuthenticator(PrincipalDirectory(self.db), hasher)
        with self.assertRaises(InvalidCredentials):
            authenticator.authenticate("ghost", "anything")
        self.assertEqual(hasher.verify.call_count, 1)

    def test_wrong_password_runs_one_verification(self) -> None:
        hasher = MagicMock(wraps=make_hasher())
        hasher.rounds = 4
        authenticator = CredentialAuthenticator(PrincipalDirectory(self.db), hasher)
        with self.assertRaises(InvalidCredentials):
            authenticator.authenticate("alice", "wrong")
        self.assertEqual(hasher.verify.call_count, 1)


if __name__ == "__main__":
    unittest.main()

"""Integration tests for SqlAlchemyUserDirectory against in-memory SQLite."""

import unittest

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.models import Base, Role, User
from app.services.user_directory import DuplicateEmailError, SqlAlchemyUserDirectory


class TestSqlAlchemyUserDirectory(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.session = sessionmaker(bind=self.engine, autoflush=False)()
        self.directory = SqlAlchemyUserDirectory(self.session)

    def tearDown(self) -> None:
        self.session.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def test_create_and_find(self) -> None:
        created = self.directory.create("alice@test.com", "hash", Role.USER)
        self.assertIsNotNone(created.id)
        self.assertIsNotNone(created.created_at)
        self.assertEqual(self.directory.find_by_email("alice@test.com"), created)
        self.assertEqual(self.directory.find_by_id(created.id).email, "alice@test.com")
        self.assertIsNone(self.directory.find_by_email("ALICE@test.com"))

    def test_role_round_trips_as_enum(self) -> None:
        created = self.directory.create("root@test.com", "hash", Role.ADMIN)
        self.assertIs(self.directory.find_by_id(created.id).role, Role.ADMIN)
        self.assertEqual(self.session.get(User, created.id).role, "ADMIN")

    def test_unique_email_enforced_by_storage(self) -> None:
        self.directory.create("alice@test.com", "hash", Role.USER)
        with self.assertRaises(DuplicateEmailError):
            self.directory.create("alice@test.com", "other", Role.USER)
        self.assertEqual(len(self.directory.list_all()), 1)

    def test_update_fields(self) -> None:
        created = self.directory.create("alice@test.com", "hash", Role.USER)
        updated = self.directory.update(created.id, email="alice2@test.com")
        self.assertEqual(updated.email, "alice2@test.com")
        self.assertEqual(updated.password_hash, "hash")
        updated = self.directory.update(created.id, password_hash="new-hash")
        self.assertEqual(updated.password_hash, "new-hash")

    def test_update_to_taken_email(self) -> None:
        self.directory.create("alice@test.com", "hash", Role.USER)
        bob = self.directory.create("bob@test.com", "hash", Role.USER)
        with self.assertRaises(DuplicateEmailError):
            self.directory.update(bob.id, email="alice@test.com")
        self.assertEqual(self.directory.find_by_id(bob.id).email, "bob@test.com")

    def test_update_and_delete_missing(self) -> None:
        self.assertIsNone(self.directory.update(404, email="x@test.com"))
        self.assertFalse(self.directory.delete(404))

    def test_delete_and_list(self) -> None:
        a = self.directory.create("alice@test.com", "hash", Role.USER)
        b = self.directory.create("bob@test.com", "hash", Role.USER)
        self.assertEqual([u.id for u in self.directory.list_all()], [a.id, b.id])
        self.assertTrue(self.directory.delete(a.id))
        self.assertEqual([u.id for u in self.directory.list_all()], [b.id])


if __name__ == "__main__":
    unittest.main()

"""Tests for user storage operations."""
import pytest

from schemas.user import UserInsert
from storage import ConstraintViolation


class TestUserLookups:

    def test_create_user_returns_generated_fields(self, make_user):
        user = make_user(username="alice")

        assert user.id is not None
        assert user.username == "alice"
        assert user.role == "user"
        assert not hasattr(user, "password")

    def test_lookups_find_created_user(self, store, make_user):
        user = make_user(username="bob", email="bob@example.com")

        assert store.get_user(user.id).username == "bob"
        assert store.get_user_by_username("bob").id == user.id
        assert store.get_user_by_email("bob@example.com").id == user.id

    def test_missing_user_is_none(self, store):
        assert store.get_user(999) is None
        assert store.get_user_by_username("ghost") is None
        assert store.get_user_by_email("ghost@example.com") is None

    def test_credentials_include_hash(self, store, make_user):
        make_user(username="carol", password="pa55word")

        creds = store.get_user_credentials("carol")

        assert creds.password != "pa55word"
        assert creds.password.startswith("$pbkdf2-sha256$")


class TestUserUniqueness:

    def test_duplicate_username_rejected(self, store, make_user):
        make_user(username="dave", email="dave@example.com")

        with pytest.raises(ConstraintViolation):
            store.create_user(UserInsert(username="dave", email="other@example.com", password="x"))

    def test_duplicate_email_rejected(self, store, make_user):
        make_user(username="erin", email="erin@example.com")

        with pytest.raises(ConstraintViolation):
            store.create_user(UserInsert(username="erin2", email="erin@example.com", password="x"))

    def test_failed_insert_leaves_no_row(self, store, make_user):
        make_user(username="frank", email="frank@example.com")

        with pytest.raises(ConstraintViolation):
            store.create_user(UserInsert(username="frank", email="f2@example.com", password="x"))

        assert store.get_user_by_email("f2@example.com") is None

"""Tests for AuthDatabase - users table access."""

from unittest.mock import Mock
from uuid import uuid4

import pytest

from auth.database import AuthDatabase
from clients.postgres_client import PostgresClient


@pytest.fixture
def postgres():
    return Mock(spec=PostgresClient)


@pytest.fixture
def auth_db(postgres):
    return AuthDatabase(postgres)


class TestGetUserByEmail:

    def test_returns_user_with_hash(self, auth_db, postgres):
        user_id = uuid4()
        postgres.execute_single.return_value = {
            "id": str(user_id),
            "name": "User",
            "email": "user@nextmail.com",
            "password": "pbkdf2_sha256$1000$aa$bb",
        }

        user = auth_db.get_user_by_email("USER@nextmail.com")

        assert user.id == user_id
        assert user.password_hash == "pbkdf2_sha256$1000$aa$bb"
        assert "lower(%s)" in postgres.execute_single.call_args.args[0]

    def test_missing_returns_none(self, auth_db, postgres):
        postgres.execute_single.return_value = None
        assert auth_db.get_user_by_email("nobody@nextmail.com") is None


class TestCreateUser:

    def test_inserts_hash(self, auth_db, postgres):
        postgres.execute_returning.return_value = [
            {"id": uuid4(), "name": "User", "email": "user@nextmail.com"}
        ]

        user = auth_db.create_user("User", "User@NextMail.com", "hash")

        assert user.email == "user@nextmail.com"
        assert postgres.execute_returning.call_args.args[1] == ("User", "User@NextMail.com", "hash")

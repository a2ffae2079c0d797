"""Tests for SecurityLogger - append-only security events."""

from unittest.mock import Mock
from uuid import uuid4

import pytest
from psycopg2.extras import Json

from auth.security_logger import SecurityEvent, SecurityLogger
from clients.postgres_client import PostgresClient


@pytest.fixture
def postgres():
    return Mock(spec=PostgresClient)


class TestLog:

    def test_inserts_event(self, postgres):
        user_id = uuid4()

        SecurityLogger(postgres).log(
            SecurityEvent.SIGN_IN_SUCCEEDED,
            email="user@nextmail.com",
            user_id=user_id,
            ip_address="127.0.0.1",
            user_agent="pytest",
        )

        query, params = postgres.execute_returning.call_args.args
        assert "INSERT INTO security_events" in query
        assert params[:5] == ("sign_in_succeeded", "user@nextmail.com", str(user_id), "127.0.0.1", "pytest")
        assert params[5] is None

    def test_details_wrapped_as_json(self, postgres):
        SecurityLogger(postgres).log(SecurityEvent.SIGN_IN_FAILED, details={"reason": "bad_password"})

        details = postgres.execute_returning.call_args.args[1][5]
        assert isinstance(details, Json)
        assert details.adapted == {"reason": "bad_password"}

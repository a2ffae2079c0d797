"""Tests for CredentialsProvider - email/password sign-in."""

from datetime import timedelta
from unittest.mock import Mock
from uuid import uuid4

import psycopg2
import pytest
import redis
from starlette.responses import Response

from auth.config import AuthConfig
from auth.credentials import CredentialsProvider
from auth.database import AuthDatabase
from auth.exceptions import CredentialsSigninError, ProviderError, RateLimitedError
from auth.passwords import hash_password
from auth.rate_limiter import RateLimiter
from auth.security_logger import SecurityEvent, SecurityLogger
from auth.session import SessionManager
from auth.types import Session, User
from utils.timezone import now_utc

PASSWORD_HASH = hash_password("123456", iterations=1000)


@pytest.fixture
def user():
    return User(id=uuid4(), name="User", email="user@nextmail.com", password_hash=PASSWORD_HASH)


@pytest.fixture
def auth_db(user):
    mock = Mock(spec=AuthDatabase)
    mock.get_user_by_email.return_value = user
    return mock


@pytest.fixture
def session_manager(user):
    now = now_utc()
    mock = Mock(spec=SessionManager)
    mock.create_session.return_value = Session(
        token="new-token",
        user_id=user.id,
        created_at=now,
        expires_at=now + timedelta(hours=24),
        last_activity_at=now,
    )
    return mock


@pytest.fixture
def rate_limiter():
    return Mock(spec=RateLimiter)


@pytest.fixture
def security_logger():
    return Mock(spec=SecurityLogger)


@pytest.fixture
def provider(auth_db, session_manager, rate_limiter, security_logger):
    return CredentialsProvider(
        config=AuthConfig(),
        auth_db=auth_db,
        session_manager=session_manager,
        rate_limiter=rate_limiter,
        security_logger=security_logger,
    )


def _events(security_logger):
    return [c.args[0] for c in security_logger.log.call_args_list]


FORM = {"email": "User@NextMail.com", "password": "123456"}


class TestSignInSuccess:

    def test_returns_session_and_sets_cookie(self, provider):
        response = Response()

        session = provider.sign_in(FORM, response)

        assert session.token == "new-token"
        cookie = response.headers["set-cookie"]
        assert "session_token=new-token" in cookie
        assert "HttpOnly" in cookie
        assert "Max-Age=86400" in cookie

    def test_normalizes_email(self, provider, auth_db, rate_limiter):
        provider.sign_in(FORM, Response())

        auth_db.get_user_by_email.assert_called_once_with("user@nextmail.com")
        rate_limiter.check_rate_limit.assert_called_once_with("user@nextmail.com")

    def test_resets_rate_limit_and_logs(self, provider, rate_limiter, security_logger):
        provider.sign_in(FORM, Response(), ip_address="10.0.0.1")

        rate_limiter.reset_rate_limit.assert_called_once_with("user@nextmail.com")
        assert _events(security_logger) == [
            SecurityEvent.SIGN_IN_SUCCEEDED,
            SecurityEvent.SESSION_CREATED,
        ]


class TestSignInRejected:

    def test_wrong_password(self, provider, session_manager, security_logger):
        response = Response()

        with pytest.raises(CredentialsSigninError):
            provider.sign_in({**FORM, "password": "654321"}, response)

        session_manager.create_session.assert_not_called()
        assert "set-cookie" not in response.headers
        assert _events(security_logger) == [SecurityEvent.SIGN_IN_FAILED]

    def test_unknown_email(self, provider, auth_db):
        auth_db.get_user_by_email.return_value = None

        with pytest.raises(CredentialsSigninError):
            provider.sign_in(FORM, Response())

    @pytest.mark.parametrize("form", [
        {},
        {"email": "not-an-email", "password": "123456"},
        {"email": "user@nextmail.com", "password": "12345"},
    ])
    def test_malformed_form_is_credentials_failure(self, provider, auth_db, form):
        with pytest.raises(CredentialsSigninError):
            provider.sign_in(form, Response())

        auth_db.get_user_by_email.assert_not_called()

    def test_rate_limited(self, provider, rate_limiter, auth_db, security_logger):
        rate_limiter.check_rate_limit.side_effect = RateLimitedError(60)

        with pytest.raises(RateLimitedError):
            provider.sign_in(FORM, Response())

        auth_db.get_user_by_email.assert_not_called()
        assert _events(security_logger) == [SecurityEvent.SIGN_IN_RATE_LIMITED]


class TestProviderFaults:

    def test_database_error(self, provider, auth_db):
        auth_db.get_user_by_email.side_effect = psycopg2.OperationalError("down")

        with pytest.raises(ProviderError):
            provider.sign_in(FORM, Response())

    def test_valkey_error(self, provider, rate_limiter):
        rate_limiter.check_rate_limit.side_effect = redis.ConnectionError("down")

        with pytest.raises(ProviderError):
            provider.sign_in(FORM, Response())


class TestSignOut:

    def test_revokes_and_clears_cookie(self, provider, session_manager, security_logger):
        response = Response()

        provider.sign_out("tok", response)

        session_manager.revoke_session.assert_called_once_with("tok")
        assert 'session_token=""' in response.headers["set-cookie"]
        assert _events(security_logger) == [SecurityEvent.SESSION_REVOKED]

    def test_valkey_error_still_clears_cookie(self, provider, session_manager, security_logger):
        session_manager.revoke_session.side_effect = redis.ConnectionError("down")
        response = Response()

        with pytest.raises(ProviderError):
            provider.sign_out("tok", response)

        assert 'session_token=""' in response.headers["set-cookie"]
        security_logger.log.assert_not_called()

    def test_database_error_while_logging(self, provider, security_logger):
        security_logger.log.side_effect = psycopg2.OperationalError("down")

        with pytest.raises(ProviderError):
            provider.sign_out("tok", Response())

"""Email/password sign-in provider.

Verifies submitted credentials against the users table and, on success,
opens a session and attaches its cookie to the outgoing response.
"""

import logging
from typing import Any, Mapping, Protocol

import psycopg2
import redis
from pydantic import ValidationError
from starlette.responses import Response

from auth.config import AuthConfig
from auth.database import AuthDatabase
from auth.exceptions import CredentialsSigninError, ProviderError, RateLimitedError
from auth.passwords import verify_password
from auth.rate_limiter import RateLimiter
from auth.security_logger import SecurityEvent, SecurityLogger
from auth.session import SessionManager
from auth.types import Credentials, Session

logger = logging.getLogger(__name__)


class SignInProvider(Protocol):
    """Anything that can turn a sign-in form into a session."""

    def sign_in(
        self,
        form_data: Mapping[str, Any],
        response: Response,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Session: ...

    def sign_out(self, session_token: str, response: Response, ip_address: str | None = None) -> None: ...


class CredentialsProvider:
    """Email/password provider backed by PostgreSQL users and Valkey sessions.

    Raises only AuthError subclasses for expected failures; store outages
    surface as ProviderError.
    """

    def __init__(
        self,
        config: AuthConfig,
        auth_db: AuthDatabase,
        session_manager: SessionManager,
        rate_limiter: RateLimiter,
        security_logger: SecurityLogger,
    ):
        self._config = config
        self._auth_db = auth_db
        self._session_manager = session_manager
        self._rate_limiter = rate_limiter
        self._security_logger = security_logger

    def sign_in(
        self,
        form_data: Mapping[str, Any],
        response: Response,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Session:
        """Verify credentials and open a session.

        Flow:
        1. Parse email/password (malformed input counts as bad credentials)
        2. Check per-email rate limit
        3. Look up user and verify password hash
        4. Create session, reset rate limit, log events
        5. Set session cookie on response

        Raises:
            CredentialsSigninError: Unknown email, wrong password or malformed form.
            RateLimitedError: Too many attempts for this email.
            ProviderError: Database or Valkey failure.
        """
        try:
            credentials = Credentials(
                email=form_data.get("email"),
                password=form_data.get("password"),
            )
        except ValidationError:
            raise CredentialsSigninError("Malformed credentials")

        email = credentials.email.lower()

        try:
            session = self._authenticate(
                email, credentials.password, ip_address, user_agent
            )
        except (psycopg2.Error, redis.RedisError) as e:
            logger.exception(f"Credential store failure while signing in {email}")
            raise ProviderError("Credential store unavailable") from e

        response.set_cookie(
            key=self._config.session_cookie_name,
            value=session.token,
            httponly=True,
            secure=self._config.session_cookie_secure,
            samesite="lax",
            max_age=int((session.expires_at - session.created_at).total_seconds()),
        )
        return session

    def _authenticate(
        self,
        email: str,
        password: str,
        ip_address: str | None,
        user_agent: str | None,
    ) -> Session:
        try:
            self._rate_limiter.check_rate_limit(email)
        except RateLimitedError:
            self._security_logger.log(
                SecurityEvent.SIGN_IN_RATE_LIMITED,
                email=email,
                ip_address=ip_address,
                user_agent=user_agent,
            )
            raise

        user = self._auth_db.get_user_by_email(email)

        if user is None or not user.password_hash or not verify_password(password, user.password_hash):
            self._security_logger.log(
                SecurityEvent.SIGN_IN_FAILED,
                email=email,
                user_id=user.id if user else None,
                ip_address=ip_address,
                user_agent=user_agent,
                details={"reason": "user_not_found" if user is None else "bad_password"},
            )
            raise CredentialsSigninError("Invalid email or password")

        session = self._session_manager.create_session(user.id)
        self._rate_limiter.reset_rate_limit(email)

        self._security_logger.log(
            SecurityEvent.SIGN_IN_SUCCEEDED,
            email=email,
            user_id=user.id,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self._security_logger.log(
            SecurityEvent.SESSION_CREATED,
            email=email,
            user_id=user.id,
            ip_address=ip_address,
            user_agent=user_agent,
        )

        return session

    def sign_out(self, session_token: str, response: Response, ip_address: str | None = None) -> None:
        """Clear cookie and revoke session. Safe to call with an unknown token.

        The cookie is cleared even when the session store is unreachable.

        Raises:
            ProviderError: Database or Valkey failure.
        """
        response.delete_cookie(key=self._config.session_cookie_name)

        try:
            self._session_manager.revoke_session(session_token)
            self._security_logger.log(
                SecurityEvent.SESSION_REVOKED,
                ip_address=ip_address,
            )
        except (psycopg2.Error, redis.RedisError) as e:
            logger.exception("Credential store failure while signing out")
            raise ProviderError("Credential store unavailable") from e

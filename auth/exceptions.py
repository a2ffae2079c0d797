"""Typed exceptions for auth failures."""

from enum import Enum


class AuthErrorType(str, Enum):
    """Closed set of sign-in failure kinds an operator can be told about."""

    CREDENTIALS_SIGNIN = "CredentialsSignin"
    PROVIDER_FAULT = "ProviderFault"
    RATE_LIMITED = "RateLimited"
    SESSION_EXPIRED = "SessionExpired"


class AuthError(Exception):
    """Base class for authentication/authorization errors."""

    type: AuthErrorType = AuthErrorType.PROVIDER_FAULT


class CredentialsSigninError(AuthError):
    """
    Email/password pair was rejected.

    Raised for unknown emails, wrong passwords and malformed submissions
    alike, so responses never reveal which one it was.
    """

    type = AuthErrorType.CREDENTIALS_SIGNIN


class ProviderError(AuthError):
    """The credential store or session store failed while signing in."""

    type = AuthErrorType.PROVIDER_FAULT


class RateLimitedError(AuthError):
    """Too many attempts. Client should wait before retrying."""

    type = AuthErrorType.RATE_LIMITED

    def __init__(self, retry_after_seconds: int):
        self.retry_after_seconds = retry_after_seconds
        super().__init__(f"Rate limited. Retry after {retry_after_seconds} seconds.")


class SessionExpiredError(AuthError):
    """Session has expired and user must re-authenticate."""

    type = AuthErrorType.SESSION_EXPIRED

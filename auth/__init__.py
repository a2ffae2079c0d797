"""Authentication and authorization modules."""

from auth.exceptions import (
    AuthError,
    AuthErrorType,
    CredentialsSigninError,
    ProviderError,
    RateLimitedError,
    SessionExpiredError,
)
from auth.types import (
    User,
    Credentials,
    Session,
)
from auth.config import AuthConfig
from auth.database import AuthDatabase
from auth.passwords import hash_password, verify_password
from auth.rate_limiter import RateLimiter
from auth.security_logger import SecurityLogger, SecurityEvent
from auth.session import SessionManager
from auth.credentials import CredentialsProvider, SignInProvider
from auth.service import AuthService
from auth.security_middleware import AuthMiddleware
from auth.api import create_auth_router

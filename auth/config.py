"""Authentication configuration."""

from pydantic import BaseModel, Field


class AuthConfig(BaseModel):
    """
    Authentication configuration.

    All durations are in their natural units (minutes for short durations,
    hours for longer ones) to make configuration intuitive.
    """

    # Session settings
    session_expiry_hours: int = Field(
        default=24,
        description="Session lifetime in hours",
        ge=1,
        le=2160,
    )
    session_cookie_name: str = Field(
        default="session_token",
        description="Cookie carrying the session token",
    )
    session_cookie_secure: bool = Field(
        default=True,
        description="Only send the session cookie over HTTPS",
    )

    # Rate limiting
    rate_limit_attempts: int = Field(
        default=5,
        description="Max sign-in attempts per email per window",
        ge=1,
        le=20,
    )
    rate_limit_window_minutes: int = Field(
        default=15,
        description="Rate limit window duration",
        ge=5,
        le=60,
    )

    # Password hashing
    password_hash_iterations: int = Field(
        default=390_000,
        description="PBKDF2-SHA256 iterations for new password hashes",
        ge=100_000,
    )

    # Navigation
    login_path: str = Field(default="/login")
    default_redirect: str = Field(
        default="/dashboard",
        description="Where to go after sign-in when no callback is given",
    )

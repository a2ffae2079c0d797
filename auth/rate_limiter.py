"""Rate limiting for sign-in attempts.

Uses Valkey with sliding window TTL - each attempt resets the expiry.
Attackers hammering the login form hit an ever-extending lockout.
"""

from clients.valkey_client import ValkeyClient
from auth.config import AuthConfig
from auth.exceptions import RateLimitedError


class RateLimiter:
    """Rate limiting for sign-in attempts using Valkey."""

    KEY_PREFIX = "ratelimit:sign_in:"

    def __init__(self, valkey: ValkeyClient, config: AuthConfig):
        self._valkey = valkey
        self._config = config
        self._window_seconds = config.rate_limit_window_minutes * 60

    def _key(self, email: str) -> str:
        """Generate rate limit key for email (normalized to lowercase)."""
        return f"{self.KEY_PREFIX}{email.lower()}"

    def check_rate_limit(self, email: str) -> None:
        """Check rate limit and increment counter.

        Sliding window: TTL resets on every attempt. Hammering extends lockout.

        Raises:
            RateLimitedError: If rate limit exceeded.
        """
        key = self._key(email)

        count = self._valkey.incr(key)
        self._valkey.expire(key, self._window_seconds)

        if count > self._config.rate_limit_attempts:
            ttl = self._valkey.ttl(key)
            raise RateLimitedError(retry_after_seconds=max(ttl, 1))

    def reset_rate_limit(self, email: str) -> None:
        """Reset rate limit after successful sign-in."""
        self._valkey.delete(self._key(email))

"""
Rendered view cache.

Listing pages are cached in Valkey per path and variant (the query string),
so repeated renders of the same search skip the database. Writes call
invalidate(path) and every variant of that path is dropped; the next render
re-fetches current data.

Each path carries a generation counter that invalidate() bumps. A render
reads the generation before it queries the database and stores its HTML
under that generation, so a page rendered from rows read before an
invalidation lands under a key no later render looks up.
"""

import logging

from clients.valkey_client import ValkeyClient

logger = logging.getLogger(__name__)


class ViewCache:
    """Path-keyed HTML cache with whole-path invalidation."""

    KEY_PREFIX = "view:"
    GENERATION_PREFIX = "view:gen:"

    def __init__(self, valkey: ValkeyClient, ttl_seconds: int = 300):
        self._valkey = valkey
        self._ttl_seconds = ttl_seconds

    def _path_prefix(self, path: str) -> str:
        return f"{self.KEY_PREFIX}{path}|"

    def _key(self, path: str, generation: int, variant: str) -> str:
        return f"{self._path_prefix(path)}{generation}|{variant}"

    def generation(self, path: str) -> int:
        """Current generation of path. Read once per render, before fetching."""
        value = self._valkey.get(f"{self.GENERATION_PREFIX}{path}")
        return int(value) if value is not None else 0

    def get(self, path: str, generation: int, variant: str = "") -> str | None:
        """Cached HTML for path and variant at generation, or None."""
        return self._valkey.get(self._key(path, generation, variant))

    def put(self, path: str, generation: int, variant: str, html: str) -> None:
        """Store rendered HTML. A TTL of 0 disables caching."""
        if self._ttl_seconds <= 0:
            return
        self._valkey.set(
            self._key(path, generation, variant), html, expire_seconds=self._ttl_seconds
        )

    def invalidate(self, path: str) -> int:
        """Mark every cached variant of path stale. Returns keys dropped."""
        generation = self._valkey.incr(f"{self.GENERATION_PREFIX}{path}")
        dropped = self._valkey.delete_prefix(self._path_prefix(path))
        logger.info(f"Invalidated view {path} to generation {generation} ({dropped} cached variants)")
        return dropped

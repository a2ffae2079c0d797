"""Tests for the rendered view cache."""

from unittest.mock import Mock

import pytest

from clients.valkey_client import ValkeyClient
from core.view_cache import ViewCache


@pytest.fixture
def valkey():
    return Mock(spec=ValkeyClient)


@pytest.fixture
def cache(valkey):
    return ViewCache(valkey, ttl_seconds=60)


class TestGeneration:

    def test_starts_at_zero(self, cache, valkey):
        valkey.get.return_value = None

        assert cache.generation("/dashboard/invoices") == 0
        valkey.get.assert_called_once_with("view:gen:/dashboard/invoices")

    def test_reads_counter(self, cache, valkey):
        valkey.get.return_value = "4"
        assert cache.generation("/dashboard/invoices") == 4


class TestGet:

    def test_reads_path_generation_and_variant_key(self, cache, valkey):
        valkey.get.return_value = "<main>cached</main>"

        result = cache.get("/dashboard/invoices", 3, "query=&page=1")

        assert result == "<main>cached</main>"
        valkey.get.assert_called_once_with("view:/dashboard/invoices|3|query=&page=1")

    def test_miss_returns_none(self, cache, valkey):
        valkey.get.return_value = None
        assert cache.get("/dashboard/invoices", 0) is None


class TestPut:

    def test_stores_with_ttl(self, cache, valkey):
        cache.put("/dashboard/invoices", 2, "page=2", "<html>")

        valkey.set.assert_called_once_with(
            "view:/dashboard/invoices|2|page=2", "<html>", expire_seconds=60
        )

    def test_zero_ttl_disables_caching(self, valkey):
        ViewCache(valkey, ttl_seconds=0).put("/dashboard/invoices", 0, "", "<html>")
        valkey.set.assert_not_called()


class TestInvalidate:

    def test_bumps_generation_and_drops_every_variant(self, cache, valkey):
        valkey.incr.return_value = 5
        valkey.delete_prefix.return_value = 3

        dropped = cache.invalidate("/dashboard/invoices")

        assert dropped == 3
        valkey.incr.assert_called_once_with("view:gen:/dashboard/invoices")
        valkey.delete_prefix.assert_called_once_with("view:/dashboard/invoices|")

    def test_prefix_does_not_cover_longer_paths(self, cache, valkey):
        """/dashboard/invoices must not match /dashboard/invoices/create."""
        valkey.incr.return_value = 1
        valkey.delete_prefix.return_value = 0
        cache.invalidate("/dashboard/invoices")

        prefix = valkey.delete_prefix.call_args.args[0]
        assert not "view:/dashboard/invoices/create|".startswith(prefix)

    def test_prefix_keeps_generation_counter(self, cache, valkey):
        valkey.incr.return_value = 1
        valkey.delete_prefix.return_value = 0
        cache.invalidate("/dashboard/invoices")

        prefix = valkey.delete_prefix.call_args.args[0]
        assert not "view:gen:/dashboard/invoices".startswith(prefix)

    def test_put_from_before_invalidation_is_unreachable(self, valkey):
        store = {}
        valkey.get.side_effect = store.get
        valkey.set.side_effect = lambda key, value, expire_seconds=None: store.__setitem__(key, value)
        valkey.incr.side_effect = lambda key: store.setdefault(key, 1)
        valkey.delete_prefix.return_value = 0
        cache = ViewCache(valkey, ttl_seconds=60)

        generation = cache.generation("/dashboard/invoices")
        cache.invalidate("/dashboard/invoices")
        cache.put("/dashboard/invoices", generation, "query=&page=1", "<stale>")

        current = cache.generation("/dashboard/invoices")
        assert current != generation
        assert cache.get("/dashboard/invoices", current, "query=&page=1") is None

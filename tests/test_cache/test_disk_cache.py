"""Tests for the diskcache-backed store and the store factory."""

from __future__ import annotations

import time
from unittest.mock import MagicMock, patch

import pytest

from jsonfetch.cache import DiskCache, RedisCache, create_cache_store
from jsonfetch.exceptions import ConfigError
from jsonfetch.models import CacheConfig


@pytest.fixture()
def cache(tmp_path):
    c = DiskCache(tmp_path)
    yield c
    c.close()


class TestDiskCache:
    def test_set_and_get(self, cache: DiskCache) -> None:
        assert cache.set_value("https://api.example.com/posts?id=22", '{"id": 22}', 3600) is True
        assert cache.get_value("https://api.example.com/posts?id=22") == '{"id": 22}'

    def test_miss_returns_none(self, cache: DiskCache) -> None:
        assert cache.get_value("https://api.example.com/missing") is None

    def test_keys_are_exact_urls(self, cache: DiskCache) -> None:
        cache.set_value("https://api.example.com/posts?id=22", "a", 3600)
        assert cache.get_value("https://api.example.com/posts?id=23") is None

    def test_ttl_expiry(self, cache: DiskCache) -> None:
        cache.set_value("k", "v", 1)
        assert cache.get_value("k") == "v"
        time.sleep(1.5)
        assert cache.get_value("k") is None

    def test_stats(self, cache: DiskCache, tmp_path) -> None:
        cache.set_value("a", "1", 60)
        cache.set_value("b", "2", 60)
        assert cache.stats() == {
            "backend": "disk",
            "directory": str(tmp_path / "responses"),
            "size": 2,
        }

    def test_double_close(self, tmp_path) -> None:
        c = DiskCache(tmp_path)
        c.close()
        c.close()


class TestCreateCacheStore:
    def test_disabled_returns_none(self, tmp_path) -> None:
        assert create_cache_store(CacheConfig(enabled=False), tmp_path) is None

    def test_disk_backend(self, tmp_path) -> None:
        store = create_cache_store(CacheConfig(backend="disk"), tmp_path)
        try:
            assert isinstance(store, DiskCache)
        finally:
            store.close()

    def test_redis_backend(self, tmp_path, quiet_output) -> None:
        with patch("jsonfetch.cache.redis_cache.redis.Redis", return_value=MagicMock()):
            store = create_cache_store(CacheConfig(backend="redis"), tmp_path)
        assert isinstance(store, RedisCache)

    def test_unknown_backend(self, tmp_path) -> None:
        with pytest.raises(ConfigError, match="memcached"):
            create_cache_store(CacheConfig(backend="memcached"), tmp_path)

"""Cache stores for jsonfetch.

This package provides the :class:`CacheStore` capability interface and two
backends: :class:`RedisCache` (redis server via redis-py) and
:class:`DiskCache` (local :mod:`diskcache` directory). Entries are keyed by
full request URL and hold raw response bodies.

Stores are consumed by :class:`~jsonfetch.client.JsonRequest` and are built
by the caller's composition root, normally through
:func:`create_cache_store`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from jsonfetch.cache.base import CacheStore
from jsonfetch.cache.disk_cache import DiskCache
from jsonfetch.cache.redis_cache import RedisCache
from jsonfetch.exceptions import ConfigError
from jsonfetch.models import CacheConfig


def create_cache_store(config: CacheConfig, cache_dir: str | Path) -> Optional[CacheStore]:
    """Build the store selected by ``config.backend``.

    Args:
        config: Cache configuration.
        cache_dir: Directory used by the ``disk`` backend.

    Returns:
        A :class:`CacheStore`, or ``None`` when caching is disabled.

    Raises:
        ConfigError: If ``config.backend`` names an unknown backend.
    """
    if not config.enabled:
        return None
    if config.backend == "redis":
        return RedisCache(config)
    if config.backend == "disk":
        return DiskCache(cache_dir)
    raise ConfigError(f"Unknown cache backend: {config.backend!r} (expected 'redis' or 'disk')")


__all__ = ["CacheStore", "DiskCache", "RedisCache", "create_cache_store"]

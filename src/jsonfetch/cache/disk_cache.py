"""Disk-based cache store.

Uses :mod:`diskcache` to persist GET response bodies on the filesystem.
Useful where no redis server is available; entries survive process restarts
and expire after the TTL given on write.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import diskcache

from jsonfetch.cache.base import CacheStore
from jsonfetch.exceptions import CacheError


class DiskCache(CacheStore):
    """Cache store backed by a :class:`diskcache.Cache` directory.

    Args:
        cache_dir: Root directory for the cache. A ``responses/``
            subdirectory is created inside it.
    """

    backend = "disk"

    def __init__(self, cache_dir: str | Path) -> None:
        self._directory = Path(cache_dir) / "responses"
        self._cache = diskcache.Cache(str(self._directory))

    def set_value(self, key: str, value: str, ttl_seconds: int) -> bool:
        try:
            return bool(self._cache.set(key, value, expire=ttl_seconds))
        except diskcache.Timeout as exc:
            raise CacheError(f"Disk cache write timed out for {key}") from exc

    def get_value(self, key: str) -> Optional[str]:
        try:
            return self._cache.get(key)
        except diskcache.Timeout as exc:
            raise CacheError(f"Disk cache read timed out for {key}") from exc

    def stats(self) -> dict[str, Any]:
        return {
            "backend": self.backend,
            "directory": str(self._directory),
            "size": len(self._cache),
        }

    def close(self) -> None:
        """Close the underlying :class:`diskcache.Cache` and release resources."""
        self._cache.close()

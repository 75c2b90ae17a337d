"""Abstract base class for cache stores.

:class:`CacheStore` is the narrow capability surface the dispatcher needs:
write a value with an expiry, read it back. Everything else (connection
handling, serialisation, expiry bookkeeping) belongs to the backend.

To add a backend, subclass :class:`CacheStore`, set :attr:`backend`, and
implement :meth:`~CacheStore.set_value` and :meth:`~CacheStore.get_value`.

See Also:
    :class:`~jsonfetch.cache.redis_cache.RedisCache` and
    :class:`~jsonfetch.cache.disk_cache.DiskCache`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional


class CacheStore(ABC):
    """Key -> text store with per-entry expiry.

    Keys are full request URLs; values are raw response bodies. Stores are
    opaque: they never parse what they hold.
    """

    backend: str = ""

    @abstractmethod
    def set_value(self, key: str, value: str, ttl_seconds: int) -> bool:
        """Store *value* under *key*, expiring after *ttl_seconds*.

        Returns:
            ``True`` when the store acknowledged the write.

        Raises:
            CacheError: If the backend rejected or could not perform the write.
        """
        ...

    @abstractmethod
    def get_value(self, key: str) -> Optional[str]:
        """Return the value stored under *key*, or ``None`` on a miss.

        Raises:
            CacheError: If the backend could not be read.
        """
        ...

    def stats(self) -> dict[str, Any]:
        """Return a small dict describing the store (backend name at minimum)."""
        return {"backend": self.backend}

    def close(self) -> None:
        """Release backend resources. The default does nothing."""

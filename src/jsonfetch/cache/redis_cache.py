"""Redis-backed cache store.

Uses :mod:`redis` (redis-py) to keep GET response bodies in a redis server
with ``SETEX`` expiry. The connection is checked eagerly: construction sends
``PING``, and a failure is reported through :func:`jsonfetch.output.error`
and recorded on :attr:`RedisCache.connection_error` instead of being raised,
so an application can still start (and fall through to the network) when
redis is down.
"""

from __future__ import annotations

from typing import Any, Optional

import redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from jsonfetch.cache.base import CacheStore
from jsonfetch.exceptions import CacheConnectionError, CacheError
from jsonfetch.models import CacheConfig
from jsonfetch.output import debug, error


class RedisCache(CacheStore):
    """Cache store talking to a redis server.

    Args:
        config: Cache configuration (``host``, ``port``, ``db``,
            ``socket_timeout``).
        client: Optional pre-built :class:`redis.Redis` client. When omitted
            one is created from *config* with ``decode_responses=True``.

    Example::

        from jsonfetch.cache import RedisCache
        from jsonfetch.models import CacheConfig

        cache = RedisCache(CacheConfig(host="127.0.0.1", port=6379))
        if cache.is_available:
            cache.set_value("https://api.example.com/posts?id=22", "[]", 3600)
    """

    backend = "redis"

    def __init__(self, config: CacheConfig, client: Optional[redis.Redis] = None) -> None:
        self._config = config
        if client is None:
            client = redis.Redis(
                host=config.host,
                port=config.port,
                db=config.db,
                decode_responses=True,
                socket_connect_timeout=config.socket_timeout,
                socket_timeout=config.socket_timeout,
            )
        self._client = client
        self.connection_error: Optional[str] = None
        self._connect()

    @property
    def is_available(self) -> bool:
        """Whether the initial ``PING`` succeeded."""
        return self.connection_error is None

    def _connect(self) -> None:
        try:
            self._client.ping()
        except RedisError as exc:
            self.connection_error = str(exc)
            error(
                f"Redis cache connection error ({self._config.host}:{self._config.port}): {exc}"
            )
            return
        debug(f"Connected to redis at {self._config.host}:{self._config.port}/{self._config.db}")

    def set_value(self, key: str, value: str, ttl_seconds: int) -> bool:
        try:
            return bool(self._client.setex(key, ttl_seconds, value))
        except (RedisConnectionError, RedisTimeoutError) as exc:
            raise CacheConnectionError(f"Redis unreachable while writing {key}: {exc}") from exc
        except RedisError as exc:
            raise CacheError(f"Redis write failed for {key}: {exc}") from exc

    def get_value(self, key: str) -> Optional[str]:
        try:
            value = self._client.get(key)
        except (RedisConnectionError, RedisTimeoutError) as exc:
            raise CacheConnectionError(f"Redis unreachable while reading {key}: {exc}") from exc
        except RedisError as exc:
            raise CacheError(f"Redis read failed for {key}: {exc}") from exc
        # Injected clients may not decode responses.
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def stats(self) -> dict[str, Any]:
        """Return backend, address, availability, and key count (when reachable)."""
        result: dict[str, Any] = {
            "backend": self.backend,
            "host": self._config.host,
            "port": self._config.port,
            "db": self._config.db,
            "available": self.is_available,
        }
        if self.is_available:
            try:
                result["size"] = self._client.dbsize()
            except RedisError as exc:
                raise CacheError(f"Redis stats failed: {exc}") from exc
        else:
            result["error"] = self.connection_error
        return result

    def close(self) -> None:
        """Close the underlying redis connection pool."""
        self._client.close()

"""Canonical Pydantic models shared across all jsonfetch modules.

The models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`CacheConfig`, :class:`RequestConfig`, :class:`OutputConfig`, and
    :class:`GlobalConfig`.

**Request models** -- built fresh for every call and never persisted:
    :class:`HTTPMethod` and :class:`RequestDescriptor`.

All models use Pydantic v2.
"""

from __future__ import annotations

import enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from jsonfetch.query import append_query


DEFAULT_TTL_SECONDS = 3600
"""Expiry applied to every cached GET response unless configured otherwise."""


# --- Configuration Models ---


class CacheConfig(BaseModel):
    """Cache store settings stored in :class:`GlobalConfig`.

    ``backend`` selects the store built by
    :func:`~jsonfetch.cache.create_cache_store`: ``"redis"`` talks to a
    redis server at ``host:port``, ``"disk"`` keeps entries in a
    :mod:`diskcache` directory under the XDG cache dir.
    """

    enabled: bool = Field(default=True, description="Enable GET response caching")
    backend: str = Field(default="redis", description="Cache backend: redis or disk")
    host: str = Field(default="127.0.0.1", description="Redis host")
    port: int = Field(default=6379, gt=0, le=65535, description="Redis port")
    db: int = Field(default=0, ge=0, description="Redis database index")
    ttl_seconds: int = Field(
        default=DEFAULT_TTL_SECONDS, gt=0, description="Cache TTL in seconds"
    )
    socket_timeout: float = Field(
        default=5.0, gt=0, description="Redis connect/read timeout in seconds"
    )


class RequestConfig(BaseModel):
    """HTTP request settings applied to every call made by the dispatcher."""

    timeout: int = Field(default=30, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    raise_on_error: bool = Field(
        default=False,
        description="Raise typed errors on network failure or non-2xx status "
        "instead of returning None",
    )


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: Literal["auto", "json", "plain", "rich"] = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/jsonfetch/config.json``.

    Loaded and saved by :func:`~jsonfetch.config.load_global_config` and
    :func:`~jsonfetch.config.save_global_config`. Environment variables and
    CLI flags override these values; see
    :func:`~jsonfetch.config.resolve_config`.
    """

    cache: CacheConfig = Field(default_factory=CacheConfig)
    request: RequestConfig = Field(default_factory=RequestConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Request Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods supported by :class:`~jsonfetch.client.JsonRequest`."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class RequestDescriptor(BaseModel):
    """A single outgoing request: method, URL, query parameters, JSON body.

    The :attr:`full_url` doubles as the cache key for GET requests, so two
    descriptors with the same URL and parameters always share an entry.
    """

    method: HTTPMethod
    url: str
    params: Optional[dict[Any, Any]] = None
    body: Any = None

    @property
    def full_url(self) -> str:
        """The URL with the encoded query string appended."""
        return append_query(self.url, self.params)

    @property
    def is_cacheable(self) -> bool:
        """Only GET requests read from or write to the cache."""
        return self.method == HTTPMethod.GET

"""Synchronous JSON request dispatcher with transparent GET caching.

This module provides :class:`JsonRequest`, a thin layer over
:class:`httpx.Client` that:

- **Encodes query parameters** into the URL with
  :func:`~jsonfetch.query.append_query`. The resulting URL is also the
  cache key.
- **Consults the cache for GET only** -- a hit is returned without any
  network traffic; every other method always goes to the network.
- **Populates the cache** with the raw body of every non-empty 2xx GET
  response, using a fixed TTL (3600 s by default).
- **Decodes JSON** before handing the result back.

By default a network error or non-2xx status yields ``None`` and is
logged as a warning. Set
:attr:`~jsonfetch.models.RequestConfig.raise_on_error` to get typed
exceptions instead.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Optional

import httpx

from jsonfetch.exceptions import (
    CacheError,
    ClientError,
    ConnectionError_,
    InvalidUsageError,
    NotFoundError,
    RequestEncodeError,
    ResponseDecodeError,
    ServerError,
)
from jsonfetch.models import (
    DEFAULT_TTL_SECONDS,
    HTTPMethod,
    RequestConfig,
    RequestDescriptor,
)
from jsonfetch.output import debug, warning

if TYPE_CHECKING:
    from jsonfetch.cache import CacheStore


JSON_HEADERS = {"Content-type": "application/json"}


class JsonRequest:
    """Blocking JSON HTTP client that caches GET responses.

    The cache store is injected: the dispatcher never builds or owns one, so
    the caller decides its lifetime (and closes it). The underlying
    :class:`httpx.Client` is opened lazily on the first request and closed
    by :meth:`close` or on leaving the ``with`` block.

    Args:
        cache: Store consulted for GET requests. ``None`` disables caching.
        config: Request settings (timeout, SSL verification, error mode).
        ttl_seconds: Expiry applied to every cache write.

    Example::

        cache = RedisCache(CacheConfig())
        with JsonRequest(cache) as client:
            post = client.get("https://jsonplaceholder.typicode.com/posts", {"id": 22})
    """

    def __init__(
        self,
        cache: Optional[CacheStore] = None,
        config: Optional[RequestConfig] = None,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ) -> None:
        self._cache = cache
        self._config = config or RequestConfig()
        self._ttl_seconds = ttl_seconds
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> JsonRequest:
        self._ensure_client()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client. The cache store is left open."""
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def request(
        self,
        method: str,
        url: str,
        params: Optional[dict[Any, Any]] = None,
        data: Any = None,
    ) -> Any:
        """Send a request and return the JSON-decoded response body.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE).
            url: Absolute target URL, optionally with a query string.
            params: Query parameters appended to *url*.
            data: JSON-serialisable body. Falsy bodies are not sent.

        Returns:
            The decoded JSON value, or ``None`` for an empty body (which is
            also what a failed request produces unless ``raise_on_error``
            is set).

        Raises:
            InvalidUsageError: For an unsupported method.
            RequestEncodeError: If *data* cannot be serialised.
            ResponseDecodeError: If the body (fresh or cached) is not JSON.
            ConnectionError_: Network failure, with ``raise_on_error``.
            HTTPStatusError: Non-2xx status, with ``raise_on_error``.
        """
        try:
            verb = HTTPMethod(method.upper())
        except ValueError as exc:
            raise InvalidUsageError(f"Unsupported HTTP method: {method}") from exc

        descriptor = RequestDescriptor(method=verb, url=url, params=params, body=data)
        raw = self._dispatch(descriptor)
        return self._decode(descriptor, raw)

    def get(self, url: str, params: Optional[dict[Any, Any]] = None) -> Any:
        """Send a GET request, answering from the cache when possible."""
        return self.request("GET", url, params)

    def post(self, url: str, params: Optional[dict[Any, Any]] = None, data: Any = None) -> Any:
        """Send a POST request with a JSON body. Never touches the cache."""
        return self.request("POST", url, params, data)

    def put(self, url: str, params: Optional[dict[Any, Any]] = None, data: Any = None) -> Any:
        """Send a PUT request with a JSON body. Never touches the cache."""
        return self.request("PUT", url, params, data)

    def patch(self, url: str, params: Optional[dict[Any, Any]] = None, data: Any = None) -> Any:
        """Send a PATCH request with a JSON body. Never touches the cache."""
        return self.request("PATCH", url, params, data)

    def delete(self, url: str, params: Optional[dict[Any, Any]] = None, data: Any = None) -> Any:
        """Send a DELETE request, with an optional JSON body. Never touches the cache."""
        return self.request("DELETE", url, params, data)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _ensure_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                timeout=self._config.timeout,
                verify=self._config.verify_ssl,
                follow_redirects=True,
            )
        return self._client

    def _dispatch(self, descriptor: RequestDescriptor) -> str:
        """Return the raw body for *descriptor*, from the cache or the network."""
        url = descriptor.full_url

        cached = self._cache_get(descriptor)
        if cached:
            debug(f"Cache hit: {url}")
            return cached

        raw = self._send(descriptor)

        if raw:
            self._cache_set(descriptor, raw)
        return raw

    def _send(self, descriptor: RequestDescriptor) -> str:
        """Perform the HTTP call. Returns ``""`` on failure unless raising is enabled."""
        client = self._ensure_client()
        method = descriptor.method.value
        url = descriptor.full_url
        content = self._encode_body(descriptor)

        try:
            response = client.request(method, url, headers=JSON_HEADERS, content=content)
        except httpx.TransportError as exc:
            if self._config.raise_on_error:
                raise ConnectionError_(f"{method} {url} failed: {exc}") from exc
            warning(f"{method} {url} failed: {exc}")
            return ""

        if not response.is_success:
            self._handle_status_error(method, url, response)
            return ""

        return response.text

    def _encode_body(self, descriptor: RequestDescriptor) -> Optional[str]:
        if not descriptor.body:
            return None
        try:
            return json.dumps(descriptor.body)
        except (TypeError, ValueError) as exc:
            raise RequestEncodeError(f"Request body is not JSON-serialisable: {exc}") from exc

    def _handle_status_error(self, method: str, url: str, response: httpx.Response) -> None:
        """Raise a typed exception for *response* or log it, per ``raise_on_error``."""
        status = response.status_code
        msg = f"HTTP {status} from {method} {url}"
        if not self._config.raise_on_error:
            warning(msg)
            return
        if status == 404:
            raise NotFoundError(msg, status_code=status)
        if status >= 500:
            raise ServerError(msg, status_code=status)
        raise ClientError(msg, status_code=status)

    def _decode(self, descriptor: RequestDescriptor, raw: str) -> Any:
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ResponseDecodeError(
                f"Invalid JSON from {descriptor.method.value} {descriptor.full_url}: {exc}"
            ) from exc

    def _cache_get(self, descriptor: RequestDescriptor) -> Optional[str]:
        """Look up a cached body for a GET request."""
        if self._cache is None or not descriptor.is_cacheable:
            return None
        try:
            return self._cache.get_value(descriptor.full_url)
        except CacheError as exc:
            warning(f"Cache lookup failed, fetching from network: {exc}")
            return None

    def _cache_set(self, descriptor: RequestDescriptor, raw: str) -> None:
        """Store a successful GET body in the cache."""
        if self._cache is None or not descriptor.is_cacheable:
            return
        url = descriptor.full_url
        try:
            self._cache.set_value(url, raw, self._ttl_seconds)
        except CacheError as exc:
            warning(f"Cache write failed for {url}: {exc}")
            return
        debug(f"Cached {url} for {self._ttl_seconds}s")

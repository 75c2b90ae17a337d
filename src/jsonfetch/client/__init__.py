"""HTTP client module for jsonfetch.

Provides :class:`JsonRequest`, a blocking JSON client that wraps
:mod:`httpx` and transparently caches GET responses in an injected
:class:`~jsonfetch.cache.CacheStore`.

Example::

    from jsonfetch.cache import RedisCache
    from jsonfetch.client import JsonRequest
    from jsonfetch.models import CacheConfig

    with JsonRequest(RedisCache(CacheConfig())) as client:
        post = client.get("https://jsonplaceholder.typicode.com/posts", {"id": 22})
"""

from jsonfetch.client.json_request import JsonRequest

__all__ = ["JsonRequest"]

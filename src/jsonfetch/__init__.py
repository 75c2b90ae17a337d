"""jsonfetch -- JSON HTTP requests with transparent GET caching.

This package sends JSON requests over :mod:`httpx` and keeps successful GET
responses in a key-value cache (redis by default, or a local
:mod:`diskcache` directory), keyed by the full request URL. A second GET for
the same URL inside the TTL is answered from the cache without touching the
network; every other verb always goes to the network.

Typical use::

    from jsonfetch.cache import RedisCache
    from jsonfetch.client import JsonRequest
    from jsonfetch.models import CacheConfig

    cache = RedisCache(CacheConfig())
    with JsonRequest(cache) as client:
        post = client.get("https://jsonplaceholder.typicode.com/posts", {"id": 22})
    cache.close()

or from the shell::

    jsonfetch get https://jsonplaceholder.typicode.com/posts -P id=22

Modules:
    app: Typer application and CLI entry point.
    client: The request dispatcher.
    cache: Cache store interface and backends.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration with environment overrides.
    query: Query string building.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"

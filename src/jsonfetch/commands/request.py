"""Request commands -- one CLI command per HTTP verb.

Each command is the composition root for a single call: it builds the cache
store from the resolved configuration, hands it to a
:class:`~jsonfetch.client.JsonRequest`, prints the decoded result, and
closes the store afterwards.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import typer

from jsonfetch.cache import create_cache_store
from jsonfetch.client import JsonRequest
from jsonfetch.config import get_cache_dir
from jsonfetch.exceptions import InvalidUsageError, JsonFetchError
from jsonfetch.models import GlobalConfig
from jsonfetch.output import error, format_response


def parse_params(pairs: Optional[list[str]]) -> dict[str, str]:
    """Turn repeated ``key=value`` options into a dict, keeping their order.

    Raises:
        InvalidUsageError: If an item has no ``=`` or an empty key.
    """
    params: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise InvalidUsageError(f"Invalid parameter {pair!r}, expected key=value")
        params[key] = value
    return params


def parse_body(body: Optional[str]) -> Any:
    """Parse the ``--data`` option as JSON.

    Raises:
        InvalidUsageError: If *body* is not valid JSON.
    """
    if body is None:
        return None
    try:
        return json.loads(body)
    except json.JSONDecodeError as exc:
        raise InvalidUsageError(f"--data is not valid JSON: {exc}") from exc


def _execute(
    ctx: typer.Context,
    method: str,
    url: str,
    param: Optional[list[str]],
    data: Optional[str] = None,
) -> None:
    config: GlobalConfig = ctx.obj["config"]
    try:
        params = parse_params(param)
        body = parse_body(data)
        cache = create_cache_store(config.cache, get_cache_dir())
        try:
            with JsonRequest(cache, config.request, ttl_seconds=config.cache.ttl_seconds) as client:
                result = client.request(method, url, params or None, body)
        finally:
            if cache is not None:
                cache.close()
    except JsonFetchError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code)
    format_response(result)


_URL = typer.Argument(help="Target URL.")
_PARAM = typer.Option(None, "--param", "-P", help="Query parameter as key=value (repeatable).")
_DATA = typer.Option(None, "--data", "-d", help="JSON request body.")


def get_command(
    ctx: typer.Context,
    url: str = _URL,
    param: Optional[list[str]] = _PARAM,
) -> None:
    """Send a GET request, answering from the cache when possible.

    Example::

        jsonfetch get https://jsonplaceholder.typicode.com/posts -P id=22
    """
    _execute(ctx, "GET", url, param)


def post_command(
    ctx: typer.Context,
    url: str = _URL,
    param: Optional[list[str]] = _PARAM,
    data: Optional[str] = _DATA,
) -> None:
    """Send a POST request with a JSON body.

    Example::

        jsonfetch post https://api.example.com/posts -d '{"title": "x"}'
    """
    _execute(ctx, "POST", url, param, data)


def put_command(
    ctx: typer.Context,
    url: str = _URL,
    param: Optional[list[str]] = _PARAM,
    data: Optional[str] = _DATA,
) -> None:
    """Send a PUT request with a JSON body."""
    _execute(ctx, "PUT", url, param, data)


def patch_command(
    ctx: typer.Context,
    url: str = _URL,
    param: Optional[list[str]] = _PARAM,
    data: Optional[str] = _DATA,
) -> None:
    """Send a PATCH request with a JSON body."""
    _execute(ctx, "PATCH", url, param, data)


def delete_command(
    ctx: typer.Context,
    url: str = _URL,
    param: Optional[list[str]] = _PARAM,
    data: Optional[str] = _DATA,
) -> None:
    """Send a DELETE request, with an optional JSON body."""
    _execute(ctx, "DELETE", url, param, data)

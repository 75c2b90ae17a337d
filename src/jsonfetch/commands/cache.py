"""Cache commands -- inspect the configured cache store."""

from __future__ import annotations

import typer

from jsonfetch.cache import create_cache_store
from jsonfetch.config import get_cache_dir
from jsonfetch.exceptions import JsonFetchError
from jsonfetch.models import GlobalConfig
from jsonfetch.output import error, format_response, info


cache_app = typer.Typer(no_args_is_help=True)


@cache_app.command("stats")
def cache_stats(ctx: typer.Context) -> None:
    """Show the backend, location, and entry count of the cache store.

    Example::

        jsonfetch cache stats --json
    """
    config: GlobalConfig = ctx.obj["config"]
    try:
        store = create_cache_store(config.cache, get_cache_dir())
        if store is None:
            info("Caching is disabled.")
            format_response({"enabled": False})
            return
        try:
            stats = store.stats()
        finally:
            store.close()
    except JsonFetchError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code)
    format_response({"enabled": True, "ttl_seconds": config.cache.ttl_seconds, **stats})

"""Typer application and CLI entry point for jsonfetch.

This module wires together the top-level Typer application: the root
callback resolves configuration and installs the output manager, and the
request verbs plus the ``cache`` and ``config`` groups are registered on it.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Unhandled exceptions are written to a crash log under
the data directory.

See Also:
    :mod:`jsonfetch.config`: Configuration resolution.
    :mod:`jsonfetch.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from jsonfetch import __version__
from jsonfetch.commands.cache import cache_app
from jsonfetch.commands.config import config_app
from jsonfetch.commands.request import (
    delete_command,
    get_command,
    patch_command,
    post_command,
    put_command,
)
from jsonfetch.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="jsonfetch",
    help="Send JSON HTTP requests with transparent GET caching.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("get")(get_command)
app.command("post")(post_command)
app.command("put")(put_command)
app.command("patch")(patch_command)
app.command("delete")(delete_command)
app.add_typer(cache_app, name="cache", help="Cache store inspection.")
app.add_typer(config_app, name="config", help="Configuration inspection.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"jsonfetch {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output (cache hits and writes)."
    ),
    no_cache: bool = typer.Option(
        False, "--no-cache", help="Bypass the cache store entirely."
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Fail on network errors and non-2xx responses."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Resolves the :class:`~jsonfetch.models.GlobalConfig`, installs the
    global :class:`~jsonfetch.output.OutputManager` and stores the config in
    ``ctx.obj["config"]`` for the sub-commands. ``--json`` / ``--plain``
    take precedence over ``output.format`` from the config file.
    """
    from jsonfetch.config import resolve_config
    from jsonfetch.exceptions import ConfigError
    from jsonfetch.output import OutputFormat, OutputManager, error, set_output

    cli_format = None
    if json_output:
        cli_format = OutputFormat.JSON
    elif plain_output:
        cli_format = OutputFormat.PLAIN

    try:
        config = resolve_config(
            no_cache=no_cache,
            strict=True if strict else None,
            cli_format=cli_format.value if cli_format else None,
        )
    except ConfigError as exc:
        set_output(
            OutputManager(
                format=cli_format or OutputFormat.AUTO,
                no_color=no_color,
                quiet=quiet,
                verbose=verbose,
            )
        )
        error(str(exc))
        raise typer.Exit(code=exc.exit_code)

    fmt = OutputFormat(config.output.format)
    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log() -> str:
    """Write the current traceback to disk and return the log file path."""
    from jsonfetch.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``jsonfetch`` console script.

    :class:`~jsonfetch.exceptions.JsonFetchError` instances that escape a
    command cause a clean exit with the error's ``exit_code``. All other
    exceptions produce a crash log and a generic failure exit.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from jsonfetch.exceptions import JsonFetchError
        from jsonfetch.output import error

        if isinstance(exc, JsonFetchError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log()
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)


if __name__ == "__main__":
    main()

"""Config commands -- view the effective configuration.

The values shown are the ones a request would use: the config file with
``JSONFETCH_*`` environment variables and root CLI flags applied.
"""

from __future__ import annotations

import typer

from jsonfetch.config import global_config_path
from jsonfetch.models import GlobalConfig
from jsonfetch.output import format_response, info


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the effective configuration.

    Example::

        jsonfetch config show --json
    """
    config: GlobalConfig = ctx.obj["config"]
    info(f"Config file: {global_config_path()}")
    format_response(config.model_dump(mode="json"))

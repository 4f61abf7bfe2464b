"""Config commands -- view the effective configuration.

Provides the ``rover-images config`` sub-command group. Settings are
resolved once by :func:`~rover_images.app.main_callback` from flags,
environment variables, and the YAML config file.
"""

from __future__ import annotations

import typer

from rover_images.models import Settings
from rover_images.output import format_response, info


config_app = typer.Typer(no_args_is_help=True)


def _mask(secret: str) -> str:
    """Hide all but the last four characters of *secret*."""
    if len(secret) <= 4:
        return "*" * len(secret)
    return "*" * (len(secret) - 4) + secret[-4:]


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the effective settings.

    Prints the config file in use (if any) to stderr and the resolved
    settings as JSON to stdout, with the API key masked.

    Example::

        rover-images config show
        ROVER_NAME=spirit rover-images config show
    """
    settings: Settings = ctx.obj["settings"]
    if settings.config_file is not None:
        info(f"Config file: {settings.config_file}")
    else:
        info("Config file: none (using defaults and environment)")

    data = settings.model_dump(mode="json", exclude={"config_file"})
    data["api_key"] = _mask(settings.api_key)
    format_response(data)

"""Cache commands -- inspect the local image URL cache.

Provides the ``rover-images cache`` sub-command group. These commands only
read the cache file; nothing here fetches from the API or modifies the
cache.
"""

from __future__ import annotations

import typer

from rover_images.cache import ImageCache
from rover_images.models import Settings
from rover_images.output import format_response, get_output, warning


cache_app = typer.Typer(no_args_is_help=True)


@cache_app.command("show")
def cache_show(
    ctx: typer.Context,
    show_all: bool = typer.Option(
        False, "--all", "-a", help="Show every rover and camera, not just the active pair."
    ),
) -> None:
    """Show cached image URLs.

    By default prints the date -> URLs mapping for the active rover and
    camera. With ``--all`` prints the whole rover -> camera -> date tree.

    Example::

        rover-images cache show
        rover-images -r spirit -C PANCAM cache show
        rover-images cache show --all
    """
    settings: Settings = ctx.obj["settings"]
    data = ImageCache.load(settings.cache_file).to_dict()

    if show_all:
        format_response(data)
        return

    dates = data.get(settings.rover_name, {}).get(settings.camera_name, {})
    if not dates:
        warning(
            f"No cached images for {settings.rover_name}/{settings.camera_name}"
        )
    format_response(dict(sorted(dates.items())))


@cache_app.command("path")
def cache_path(ctx: typer.Context) -> None:
    """Print the cache file location.

    Example::

        rover-images cache path
    """
    settings: Settings = ctx.obj["settings"]
    get_output().print_data(str(settings.cache_file))

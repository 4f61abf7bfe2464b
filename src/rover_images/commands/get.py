"""The ``rover-images get`` command.

Loads the image cache, assembles the trailing ten-day window for the
configured rover and camera, saves the cache, and prints the window as
JSON on stdout. Any error aborts before the cache is written or anything is
printed.
"""

from __future__ import annotations

import typer

from rover_images.cache import ImageCache
from rover_images.client import PhotoClient
from rover_images.models import Settings
from rover_images.output import debug, format_response
from rover_images.window import assemble_window


def get_command(ctx: typer.Context) -> None:
    """Obtain images from a Mars rover for the last 10 days.

    Dates already in the cache are served from it; other dates are fetched
    from the NASA API and added to the cache. At most three image URLs are
    printed per date.

    Example::

        rover-images get
        rover-images --rover perseverance --camera NAVCAM_LEFT get
    """
    settings: Settings = ctx.obj["settings"]
    rover = settings.rover_name
    camera = settings.camera_name

    cache = ImageCache.load(settings.cache_file)
    debug(f"{len(cache)} cached date(s) across all rovers and cameras")

    with PhotoClient(settings) as client:
        response = assemble_window(cache, client, rover, camera)

    cache.store(settings.cache_file)
    format_response(response)

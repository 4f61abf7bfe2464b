"""Built-in CLI sub-commands for rover-images.

* :mod:`~rover_images.commands.get` -- assemble and print the ten-day window.
* :mod:`~rover_images.commands.config` -- show the effective settings.
* :mod:`~rover_images.commands.cache` -- inspect the local image cache.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``config`` and ``cache``) or a plain callback
function registered directly on the root app (for ``get``). All of them read
the resolved :class:`~rover_images.models.Settings` from ``ctx.obj``.
"""

"""Typer application and CLI entry point for rover-images.

This module wires together the top-level Typer application: global options
(``--config``, ``--rover``, ``--camera`` and output flags), the ``get``
command, and the ``config`` and ``cache`` sub-command groups.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app,
turning :class:`~rover_images.exceptions.RoverImagesError` into an error
message and exit code. Unexpected exceptions are written to a crash log
under the data directory.

See Also:
    :mod:`rover_images.config`: Settings resolution.
    :mod:`rover_images.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from rover_images import __version__
from rover_images.exit_codes import EXIT_GENERIC_FAILURE, EXIT_SUCCESS

BANNER = "Mars Rover Images Query CLI"

app = typer.Typer(
    name="rover-images",
    help="Fetch and cache Mars rover photos for the last 10 days.",
    add_completion=False,
    rich_markup_mode="rich",
)

# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #

from rover_images.commands.cache import cache_app  # noqa: E402
from rover_images.commands.config import config_app  # noqa: E402
from rover_images.commands.get import get_command  # noqa: E402

app.command("get")(get_command)
app.add_typer(config_app, name="config", help="Configuration inspection.")
app.add_typer(cache_app, name="cache", help="Image cache inspection.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"rover-images {__version__}")
        raise typer.Exit(code=EXIT_SUCCESS)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="Config file (default is $HOME/config.yaml)."
    ),
    rover: Optional[str] = typer.Option(
        None, "--rover", "-r", help="Name of the rover to get images from [default: curiosity]."
    ),
    camera: Optional[str] = typer.Option(
        None, "--camera", "-C", help="Name of the camera to get images from [default: NAVCAM]."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Plain JSON output, even on a terminal."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~rover_images.output.OutputManager` from
    CLI flags. When a sub-command follows, resolves
    :class:`~rover_images.models.Settings` and stores it in ``ctx.obj``;
    otherwise prints the banner.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        config_file: Config file override.
        rover: Rover name override (highest precedence).
        camera: Camera name override (highest precedence).
        json_output: Force plain JSON output format.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable debug-level diagnostic output.

    Raises:
        InvalidUsageError: If ``--rover`` or ``--camera`` is blank.
        ConfigError: If the configuration cannot be resolved.
    """
    from rover_images.config import resolve_settings
    from rover_images.exceptions import InvalidUsageError
    from rover_images.output import OutputFormat, OutputManager, debug, set_output

    fmt = OutputFormat.JSON if json_output else OutputFormat.AUTO
    set_output(
        OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    )

    if ctx.invoked_subcommand is None:
        typer.echo(BANNER)
        return

    for flag, value in (("--rover", rover), ("--camera", camera)):
        if value is not None and not value.strip():
            raise InvalidUsageError(f"{flag} must not be empty")

    settings = resolve_settings(config_file=config_file, rover=rover, camera=camera)
    if settings.config_file is not None:
        debug(f"Using config file: {settings.config_file}")

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from rover_images.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``rover-images`` console script.

    Unhandled :class:`~rover_images.exceptions.RoverImagesError` instances
    cause a clean exit with the error's ``exit_code``. All other exceptions
    produce a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
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
        from rover_images.exceptions import RoverImagesError
        from rover_images.output import error

        if isinstance(exc, RoverImagesError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)

"""rover_images -- Cache-first Mars rover photo lookups from the command line.

This package queries the NASA Mars Rover Photos API for a trailing ten-day
window and keeps the image URLs it finds in a local JSON cache, keyed by
rover, camera, and earth date, so that repeated runs only hit the network
for dates that have never been fetched.

Typical workflow::

    rover-images get                       # curiosity / NAVCAM, last 10 days
    rover-images -r perseverance -C MCZ_LEFT get

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for settings and API payloads.
    config: YAML/environment settings resolution and atomic file writes.
    window: The ten-day window assembler and its capped response.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"

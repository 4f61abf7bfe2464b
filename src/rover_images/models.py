"""Canonical Pydantic models shared across rover_images modules.

The models fall into two groups:

**Configuration models** -- built by :func:`~rover_images.config.resolve_settings`
from defaults, the YAML config file, environment variables, and CLI flags:
    :class:`Settings`.

**API payload models** -- parsed from the Mars Rover Photos API:
    :class:`PhotoCamera`, :class:`PhotoRover`, :class:`Photo`, and
    :class:`PhotosResponse`.

Payload models ignore unknown fields so that additions on the API side do
not break parsing. Only :attr:`Photo.img_src` and :attr:`Photo.earth_date`
are required; everything else is descriptive metadata.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

NASA_BASE_URL = "https://api.nasa.gov/mars-photos/api/v1"
DEFAULT_API_KEY = "DEMO_KEY"
DEFAULT_ROVER = "curiosity"
DEFAULT_CAMERA = "NAVCAM"
CACHE_FILENAME = ".rover-images.cache"


def default_cache_file() -> Path:
    """Return ``$HOME/.rover-images.cache``."""
    return Path.home() / CACHE_FILENAME


# --- Configuration ---


class Settings(BaseModel):
    """Effective settings for a single CLI run.

    Field names double as the config-file keys (``rover_name`` may also be
    written ``rover-name``) and, upper-cased, as the environment variable
    names that override them. See :func:`~rover_images.config.resolve_settings`
    for the precedence chain.
    """

    cache_file: Path = Field(
        default_factory=default_cache_file,
        description="JSON file holding previously fetched image URLs",
    )
    rover_name: str = Field(default=DEFAULT_ROVER, description="Rover to query")
    camera_name: str = Field(default=DEFAULT_CAMERA, description="Camera to query")
    api_key: str = Field(default=DEFAULT_API_KEY, description="api.nasa.gov key")
    base_url: str = Field(default=NASA_BASE_URL, description="Mars Rover Photos API root")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    config_file: Optional[Path] = Field(
        default=None, description="YAML file the settings were read from, if any"
    )

    @field_validator("cache_file", "config_file")
    @classmethod
    def _expand_home(cls, value: Optional[Path]) -> Optional[Path]:
        return value.expanduser() if value is not None else None


# --- API payloads ---


class PhotoCamera(BaseModel):
    """Camera metadata attached to each photo."""

    id: Optional[int] = None
    name: str = ""
    rover_id: Optional[int] = None
    full_name: str = ""


class PhotoRover(BaseModel):
    """Rover metadata attached to each photo."""

    id: Optional[int] = None
    name: str = ""
    landing_date: Optional[str] = None
    launch_date: Optional[str] = None
    status: Optional[str] = None


class Photo(BaseModel):
    """A single entry of the ``photos`` array.

    ``sol`` is the mission day number; ``earth_date`` is the ``YYYY-MM-DD``
    date the photo was taken.
    """

    id: Optional[int] = None
    sol: Optional[int] = None
    camera: PhotoCamera = Field(default_factory=PhotoCamera)
    img_src: str
    earth_date: str
    rover: PhotoRover = Field(default_factory=PhotoRover)


class PhotosResponse(BaseModel):
    """Body of ``GET /rovers/{rover}/photos``."""

    photos: list[Photo] = Field(default_factory=list)

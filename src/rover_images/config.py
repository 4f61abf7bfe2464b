"""Settings resolution with YAML files, environment overrides, and atomic writes.

This module handles all configuration for rover_images:

* **Config file** -- A YAML document, ``$HOME/config.yaml`` by default or
  the path given with ``--config``. See :func:`load_config_file`.
* **Environment** -- Any environment variable named after a known key in
  upper case (``CACHE_FILE``, ``ROVER_NAME``, ``API_KEY``, ...) overrides
  the file value. See :func:`load_env_overrides`.
* **Precedence resolution** -- :func:`resolve_settings` merges CLI flags,
  environment variables, the config file, and defaults into a
  :class:`~rover_images.models.Settings`.
* **Data directory** -- XDG compliant location for crash logs
  (:func:`get_data_dir`).

:func:`atomic_write` is shared with the image cache so that a crash while
saving never leaves a truncated cache file behind.
"""

from __future__ import annotations

import datetime as dt
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import ValidationError

from rover_images.exceptions import ConfigError
from rover_images.models import Settings

_APP_NAME = "rover-images"
_CONFIG_FILENAME = "config.yaml"

KNOWN_KEYS: tuple[str, ...] = tuple(
    name for name in Settings.model_fields if name != "config_file"
)
"""Keys recognised in the config file and, upper-cased, in the environment."""

_STRING_KEYS = frozenset(KNOWN_KEYS) - {"timeout"}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/rover-images/`` (default
    ``~/.local/share/rover-images/``). On macOS/Windows: ``~/.rover-images/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_DATA_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".local" / "share"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


def default_config_path() -> Path:
    """Return ``$HOME/config.yaml``."""
    return Path.home() / _CONFIG_FILENAME


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Write *data* to *path* atomically using temp file + rename.

    The temporary file lives in the destination directory so that
    ``os.replace`` is an atomic rename on POSIX. The temp file is created
    with owner-only read/write permissions, which the renamed file keeps.
    On any failure the temp file is removed and the error re-raised.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp = tempfile.NamedTemporaryFile(
        mode="w",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
        encoding="utf-8",
    )
    try:
        with tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp.name, path)
    except BaseException:
        try:
            os.unlink(tmp.name)
        except OSError:
            pass
        raise


# --- Sources ---


def _normalize_key(key: Any) -> str:
    """Map ``Rover-Name`` / ``rover_name`` / ``ROVER_NAME`` to ``rover_name``."""
    return str(key).strip().lower().replace("-", "_")


def _scalar_to_str(value: Any) -> Any:
    """Render YAML numbers, booleans and dates as text for string-valued keys.

    ``api_key: 1234567890`` and ``camera-name: on`` are read back as the
    strings ``"1234567890"`` and ``"true"``. Lists and mappings are returned
    unchanged so that validation still rejects them.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return value


def load_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML config file and return the recognised keys.

    Keys are matched case-insensitively and may use ``-`` or ``_``.
    Unknown keys are ignored. An empty file yields an empty dict.

    Args:
        path: The YAML file to read.

    Returns:
        A dict keyed by :data:`KNOWN_KEYS` names.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or its
            top level is not a mapping.
    """
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(
            f"Config file {path} must contain a mapping, got {type(raw).__name__}"
        )

    values: dict[str, Any] = {}
    for key, value in raw.items():
        name = _normalize_key(key)
        if name in _STRING_KEYS:
            values[name] = _scalar_to_str(value)
        elif name in KNOWN_KEYS:
            values[name] = value
    return values


def load_env_overrides(environ: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    """Collect non-empty environment variables named after known keys.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        A dict keyed by :data:`KNOWN_KEYS` names.
    """
    env = os.environ if environ is None else environ
    values: dict[str, str] = {}
    for name in KNOWN_KEYS:
        value = env.get(name.upper())
        if value:
            values[name] = value
    return values


# --- Precedence resolution ---


def resolve_settings(
    config_file: Optional[str | Path] = None,
    rover: Optional[str] = None,
    camera: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Resolve settings with the full precedence chain.

    Precedence (high to low):
        1. CLI flags (``rover``, ``camera``)
        2. Environment variables (``ROVER_NAME``, ``CACHE_FILE``, ...)
        3. Config file (``config_file`` or ``$HOME/config.yaml``)
        4. Defaults

    A missing default config file is normal; a missing file that was named
    explicitly is an error.

    Returns:
        The validated :class:`~rover_images.models.Settings`.

    Raises:
        ConfigError: If the config file is missing (when explicit), malformed,
            or any resolved value fails validation.
    """
    values: dict[str, Any] = {}

    # 3. Config file
    if config_file is not None:
        path = Path(config_file).expanduser()
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
    else:
        path = default_config_path()

    if path.is_file():
        values.update(load_config_file(path))
        values["config_file"] = path

    # 2. Environment
    values.update(load_env_overrides(environ))

    # 1. CLI flags
    if rover is not None:
        values["rover_name"] = rover
    if camera is not None:
        values["camera_name"] = camera

    try:
        return Settings.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc

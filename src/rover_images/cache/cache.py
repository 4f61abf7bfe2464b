"""JSON-file backed cache of image URLs keyed by rover, camera, and date.

The on-disk format is a single UTF-8 JSON object::

    {
      "curiosity": {
        "NAVCAM": {
          "2024-01-10": ["https://mars.nasa.gov/...JPG", "..."]
        }
      }
    }

A missing file is the normal first-run state and loads as an empty cache.
A file that exists but cannot be read, parsed, or does not have this
three-level shape raises :class:`~rover_images.exceptions.CacheError`;
no attempt is made to salvage part of a corrupt cache.

There is no eviction or expiry: URL lists only ever grow.

See Also:
    :func:`~rover_images.config.atomic_write` -- used by :meth:`ImageCache.store`.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from rover_images.config import atomic_write
from rover_images.exceptions import CacheError
from rover_images.output import debug

CacheData = dict[str, dict[str, dict[str, list[str]]]]

_CACHE_ADAPTER: TypeAdapter[CacheData] = TypeAdapter(CacheData)


class ImageCache:
    """In-memory image URL cache with explicit load/store.

    Args:
        data: Initial three-level mapping. The cache takes ownership of it.

    Example::

        cache = ImageCache.load(settings.cache_file)
        cache.initialize("curiosity", "NAVCAM")
        if cache.lookup("curiosity", "NAVCAM", "2024-01-10") is None:
            cache.put("curiosity", "NAVCAM", "2024-01-10", url)
        cache.store(settings.cache_file)
    """

    def __init__(self, data: Optional[CacheData] = None) -> None:
        self._data: CacheData = data if data is not None else {}

    # ------------------------------------------------------------------ #
    # Persistence
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path) -> ImageCache:
        """Load the cache from *path*.

        Args:
            path: Cache file location.

        Returns:
            The loaded cache, or an empty one if *path* does not exist.

        Raises:
            CacheError: If the file exists but cannot be read, is not valid
                JSON, or is not a rover/camera/date/URL-list mapping.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            debug(f"No cache at {path}, starting empty")
            return cls()
        except (OSError, UnicodeDecodeError) as exc:
            raise CacheError(f"Error reading cache file {path}: {exc}") from exc

        try:
            data = _CACHE_ADAPTER.validate_json(text)
        except ValidationError as exc:
            raise CacheError(f"Invalid cache file {path}: {exc}") from exc

        debug(f"Loaded cache from {path}")
        return cls(data)

    def store(self, path: str | Path) -> None:
        """Overwrite *path* with the full cache contents.

        Raises:
            CacheError: If the cache cannot be serialised or written.
        """
        path = Path(path)
        try:
            text = json.dumps(self._data, ensure_ascii=False)
            atomic_write(path, text)
        except (OSError, TypeError, ValueError) as exc:
            raise CacheError(f"Error saving cache to {path}: {exc}") from exc
        debug(f"Saved cache to {path}")

    # ------------------------------------------------------------------ #
    # Access
    # ------------------------------------------------------------------ #

    def initialize(self, rover: str, camera: str) -> None:
        """Ensure the *rover* and *rover*/*camera* levels exist."""
        self._data.setdefault(rover, {}).setdefault(camera, {})

    def lookup(self, rover: str, camera: str, date: str) -> Optional[list[str]]:
        """Return the URLs stored for the exact key triple, or ``None`` on a miss.

        An entry holding an empty list is a hit and returns ``[]``.
        """
        return self._data.get(rover, {}).get(camera, {}).get(date)

    def put(self, rover: str, camera: str, date: str, url: str) -> None:
        """Append *url* to the list at the key triple, creating it if needed.

        Duplicates are kept.
        """
        dates = self._data.setdefault(rover, {}).setdefault(camera, {})
        dates.setdefault(date, []).append(url)

    def to_dict(self) -> CacheData:
        """Return a deep copy of the underlying mapping."""
        return copy.deepcopy(self._data)

    def __len__(self) -> int:
        """Number of cached (rover, camera, date) entries."""
        return sum(
            len(dates) for cameras in self._data.values() for dates in cameras.values()
        )

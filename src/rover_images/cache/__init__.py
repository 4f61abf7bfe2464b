"""Local image URL cache for rover_images.

This package provides :class:`ImageCache`, a three-level mapping of
rover name -> camera name -> earth date -> image URLs, persisted as a
single JSON document (``$HOME/.rover-images.cache`` by default).

The cache is loaded once at the start of ``rover-images get``, consulted by
:func:`~rover_images.window.assemble_window` before any network call, and
written back once after the window has been assembled.
"""

from rover_images.cache.cache import ImageCache

__all__ = ["ImageCache"]

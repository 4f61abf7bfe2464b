"""HTTP client for the Mars Rover Photos API.

Provides :class:`PhotoClient`, a thin :mod:`httpx` wrapper that turns a
(rover, camera, earth date) triple into a list of
:class:`~rover_images.models.Photo` records, and the :class:`PhotoFetcher`
protocol that :func:`~rover_images.window.assemble_window` depends on.
"""

from rover_images.client.photo_client import PhotoClient, PhotoFetcher

__all__ = ["PhotoClient", "PhotoFetcher"]

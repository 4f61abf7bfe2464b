"""Cache-first assembly of the trailing ten-day photo window.

For each of the ten calendar dates ending today, :func:`assemble_window`
serves the date from the :class:`~rover_images.cache.ImageCache` when an
entry exists and otherwise asks a
:class:`~rover_images.client.PhotoFetcher`, writing every fetched URL back
into the cache. Each date contributes at most :data:`MAX_IMAGES_PER_DATE`
URLs to the resulting :class:`WindowResponse`.

A :class:`~rover_images.exceptions.FetchError` for any date propagates out
of :func:`assemble_window` unchanged, so the caller never sees a partial
window. Persisting the cache is left to the caller.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from rover_images.cache import ImageCache
from rover_images.client import PhotoFetcher
from rover_images.output import debug

WINDOW_DAYS = 10
"""Number of consecutive dates in a window, today included."""

MAX_IMAGES_PER_DATE = 3
"""Upper bound on URLs per date in a :class:`WindowResponse`."""


class WindowResponse(dict[str, list[str]]):
    """Date-keyed image URLs, capped per date.

    A plain ``dict`` subclass so that it serialises directly with
    :func:`json.dumps`. Only :meth:`add_image` should be used to populate it.
    """

    def add_image(self, date: str, url: str) -> bool:
        """Offer *url* for *date*; return whether it was admitted.

        The first URL for a date is always admitted. Later URLs are admitted
        while the date holds fewer than :data:`MAX_IMAGES_PER_DATE`.
        """
        # First admission skips the cap check.
        if date not in self:
            self[date] = [url]
            return True
        if len(self[date]) < MAX_IMAGES_PER_DATE:
            debug(f"adding image for {date}: {url}")
            self[date].append(url)
            return True
        debug(f"max images met for date key {date}")
        return False


def window_dates(today: Optional[dt.date] = None) -> list[str]:
    """Return the :data:`WINDOW_DAYS` ISO dates ending at *today*, oldest first."""
    if today is None:
        today = dt.date.today()
    return [
        (today + dt.timedelta(days=offset)).isoformat()
        for offset in range(-(WINDOW_DAYS - 1), 1)
    ]


def assemble_window(
    cache: ImageCache,
    fetcher: PhotoFetcher,
    rover: str,
    camera: str,
    today: Optional[dt.date] = None,
) -> WindowResponse:
    """Build the capped response for the window ending at *today*.

    Args:
        cache: Consulted first for every date; fetched URLs are appended to it.
        fetcher: Called only for dates missing from *cache*.
        rover: Rover name.
        camera: Camera name.
        today: Last date of the window. Defaults to the local current date.

    Returns:
        The assembled :class:`WindowResponse`. Dates with no photos at all
        are absent.

    Raises:
        FetchError: Propagated from *fetcher* on the first failing date.
    """
    cache.initialize(rover, camera)
    response = WindowResponse()

    for date in window_dates(today):
        cached = cache.lookup(rover, camera, date)
        if cached is not None:
            debug(f"cache hit for {rover}/{camera}/{date}")
            for url in cached:
                response.add_image(date, url)
            continue

        debug(f"cache miss for {rover}/{camera}/{date}")
        for photo in fetcher.fetch_photos(rover, camera, date):
            cache.put(rover, camera, date, photo.img_src)
            response.add_image(date, photo.img_src)

    return response

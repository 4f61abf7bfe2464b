"""Synchronous client for ``GET /rovers/{rover}/photos``.

This module provides :class:`PhotoClient`, which wraps :class:`httpx.Client`
and layers on:

- **Query building** -- rover as a path segment; ``earth_date``, ``camera``
  and ``api_key`` as query parameters.
- **Error mapping** -- transport failures and non-2xx statuses become typed
  :class:`~rover_images.exceptions.FetchError` subclasses.
- **Response parsing** -- the body is validated into a
  :class:`~rover_images.models.PhotosResponse`.

Requests are not retried: the first failure aborts the run.
"""

from __future__ import annotations

from typing import Optional, Protocol

import httpx
from pydantic import ValidationError

from rover_images.exceptions import (
    AuthError,
    ConnectionError_,
    FetchError,
    NotFoundError,
    RateLimitError,
    ResponseParseError,
    ServerError,
)
from rover_images.models import Photo, PhotosResponse, Settings
from rover_images.output import debug


class PhotoFetcher(Protocol):
    """Anything that can resolve one (rover, camera, date) to photos."""

    def fetch_photos(self, rover: str, camera: str, earth_date: str) -> list[Photo]:
        ...


class PhotoClient:
    """Synchronous Mars Rover Photos API client.

    Must be used as a context manager so that the underlying transport is
    opened and closed once per run.

    Args:
        settings: Supplies ``base_url``, ``api_key``, and ``timeout``.
        transport: Optional :mod:`httpx` transport, used by tests to serve
            canned responses.

    Example::

        with PhotoClient(settings) as client:
            photos = client.fetch_photos("curiosity", "NAVCAM", "2024-01-10")
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> PhotoClient:
        self._client = httpx.Client(
            base_url=self._settings.base_url.rstrip("/"),
            timeout=self._settings.timeout,
            follow_redirects=True,
            headers={"Accept": "application/json"},
            transport=self._transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def fetch_photos(self, rover: str, camera: str, earth_date: str) -> list[Photo]:
        """Return every photo *rover*'s *camera* took on *earth_date*.

        An empty list means the API answered successfully with no photos.

        Args:
            rover: Rover name, e.g. ``curiosity``.
            camera: Camera abbreviation, e.g. ``NAVCAM``.
            earth_date: ``YYYY-MM-DD``.

        Raises:
            ConnectionError_: On network or timeout errors.
            AuthError: On 401 / 403.
            NotFoundError: On 404.
            RateLimitError: On 429.
            ServerError: On 5xx.
            FetchError: On any other non-2xx status.
            ResponseParseError: If a 2xx body is not a valid photos document.
        """
        assert self._client is not None, "Client not initialised -- use as context manager"

        path = f"/rovers/{rover}/photos"
        params = {
            "earth_date": earth_date,
            "camera": camera,
            "api_key": self._settings.api_key,
        }
        debug(f"GET {path} earth_date={earth_date} camera={camera}")

        try:
            response = self._client.get(path, params=params)
        except httpx.TransportError as exc:
            raise ConnectionError_(f"Error getting photos for {earth_date}: {exc}") from exc

        self._map_response_error(response)

        try:
            parsed = PhotosResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise ResponseParseError(
                f"Unexpected response body for {earth_date}: {exc}"
            ) from exc

        debug(f"{len(parsed.photos)} photo(s) for {earth_date}")
        return parsed.photos

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _map_response_error(self, response: httpx.Response) -> None:
        """Raise a typed exception for non-2xx HTTP status codes."""
        status = response.status_code
        if 200 <= status < 300:
            return

        # The API wraps errors as {"error": {"code": ..., "message": ...}}
        # or {"errors": "..."}; fall back to the raw text.
        try:
            detail = response.json()
            if isinstance(detail, dict):
                inner = detail.get("error")
                if isinstance(inner, dict):
                    msg = inner.get("message") or inner.get("code") or ""
                else:
                    msg = inner or detail.get("errors") or detail.get("msg") or ""
            else:
                msg = str(detail)
        except ValueError:
            msg = response.text[:200] if response.text else ""

        prefix = f"HTTP {status}"
        full_msg = f"{prefix}: {msg}" if msg else prefix

        if status in (401, 403):
            raise AuthError(full_msg)
        if status == 404:
            raise NotFoundError(full_msg)
        if status == 429:
            raise RateLimitError(full_msg)
        if status >= 500:
            raise ServerError(full_msg)
        raise FetchError(full_msg)

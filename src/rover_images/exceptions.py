"""Exception hierarchy for rover_images.

All exceptions inherit from :class:`RoverImagesError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`rover_images.exit_codes`. Core components raise these instead of
terminating the process; :func:`rover_images.app.main` is the only place
that turns them into an exit status.

Subclass hierarchy::

    RoverImagesError (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- ConfigError             (exit 1)
    +-- CacheError              (exit 8)
    +-- FetchError              (exit 9)
        +-- AuthError           (exit 3)
        +-- NotFoundError       (exit 4)
        +-- ServerError         (exit 5)
        +-- ConnectionError_    (exit 6)
        +-- RateLimitError      (exit 9)
        +-- ResponseParseError  (exit 9)
"""

from rover_images.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CACHE_ERROR,
    EXIT_CONNECTION_ERROR,
    EXIT_FETCH_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SERVER_ERROR,
)


class RoverImagesError(Exception):
    """Base exception for all rover_images errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`rover_images.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(RoverImagesError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(RoverImagesError):
    """Raised for configuration problems (missing or malformed YAML, invalid values)."""

    exit_code = EXIT_GENERIC_FAILURE


class CacheError(RoverImagesError):
    """Raised when the image cache file exists but cannot be read, parsed, or written."""

    exit_code = EXIT_CACHE_ERROR


class FetchError(RoverImagesError):
    """Base class for every failure talking to the imagery API.

    A fetch error for any single date aborts the whole window.
    """

    exit_code = EXIT_FETCH_ERROR


class AuthError(FetchError):
    """Raised when the API rejects the key (HTTP 401 / 403)."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(FetchError):
    """Raised when the API returns HTTP 404."""

    exit_code = EXIT_NOT_FOUND


class ServerError(FetchError):
    """Raised when the API returns an HTTP 5xx server error."""

    exit_code = EXIT_SERVER_ERROR


class ConnectionError_(FetchError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class RateLimitError(FetchError):
    """Raised when the API returns HTTP 429 (the shared ``DEMO_KEY`` hits this quickly)."""


class ResponseParseError(FetchError):
    """Raised when a 2xx response body is not JSON or lacks the expected photo fields."""

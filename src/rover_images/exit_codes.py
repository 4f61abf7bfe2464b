"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~rover_images.exceptions.RoverImagesError` subclass.
Shell wrappers can inspect the exit code to tell a bad API key from a
corrupt cache file without parsing stderr.

Example::

    $ rover-images get
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- the API key was rejected
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred (also used for configuration errors)."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_AUTH_FAILURE = 3
"""The imagery API rejected the API key (HTTP 401/403)."""

EXIT_NOT_FOUND = 4
"""The imagery API returned HTTP 404 (usually an unknown rover name)."""

EXIT_SERVER_ERROR = 5
"""The imagery API returned an HTTP 5xx server error."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_CACHE_ERROR = 8
"""The image cache file could not be read, parsed, or written."""

EXIT_FETCH_ERROR = 9
"""Any other failed or unparseable response from the imagery API."""

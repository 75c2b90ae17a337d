"""Exception hierarchy for jsonfetch.

All exceptions inherit from :class:`JsonFetchError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`jsonfetch.exit_codes`.
The CLI entry point in :func:`jsonfetch.app.main` catches ``JsonFetchError``
and exits with the appropriate code, while unexpected exceptions produce a
crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    JsonFetchError (exit 1)
    +-- InvalidUsageError      (exit 2)
    +-- ConfigError            (exit 1)
    +-- ConnectionError_       (exit 6)
    +-- HTTPStatusError        (exit 5)
    |   +-- ClientError        (exit 5)
    |   +-- NotFoundError      (exit 4)
    |   +-- ServerError        (exit 5)
    +-- RequestEncodeError     (exit 2)
    +-- ResponseDecodeError    (exit 7)
    +-- CacheError             (exit 8)
        +-- CacheConnectionError (exit 8)
"""

from jsonfetch.exit_codes import (
    EXIT_CACHE_ERROR,
    EXIT_CONNECTION_ERROR,
    EXIT_DECODE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_HTTP_ERROR,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
)


class JsonFetchError(Exception):
    """Base exception for all jsonfetch errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`jsonfetch.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(JsonFetchError):
    """Raised for invalid CLI arguments (malformed ``key=value`` params, bad JSON)."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(JsonFetchError):
    """Raised for configuration problems (invalid JSON, bad environment overrides)."""

    exit_code = EXIT_GENERIC_FAILURE


class ConnectionError_(JsonFetchError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class HTTPStatusError(JsonFetchError):
    """Raised when the API answers with a non-2xx status.

    Args:
        message: Human-readable error description.
        status_code: The HTTP status code of the response.
    """

    exit_code = EXIT_HTTP_ERROR

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code


class ClientError(HTTPStatusError):
    """Raised on 4xx responses other than 404."""


class NotFoundError(HTTPStatusError):
    """Raised when the API returns HTTP 404 (resource not found)."""

    exit_code = EXIT_NOT_FOUND


class ServerError(HTTPStatusError):
    """Raised when the API returns an HTTP 5xx server error."""


class RequestEncodeError(JsonFetchError):
    """Raised when a request body cannot be serialised to JSON."""

    exit_code = EXIT_INVALID_USAGE


class ResponseDecodeError(JsonFetchError):
    """Raised when a response body or cached value is not valid JSON."""

    exit_code = EXIT_DECODE_ERROR


class CacheError(JsonFetchError):
    """Raised when a cache store operation fails."""

    exit_code = EXIT_CACHE_ERROR


class CacheConnectionError(CacheError):
    """Raised when an operation is attempted on a store that never connected."""

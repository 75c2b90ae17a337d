"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~jsonfetch.exceptions.JsonFetchError` subclass.
Shell wrappers can inspect the exit code to tell a missing resource from an
unreachable cache without parsing stderr.

Example::

    $ jsonfetch get https://api.example.com/posts -P id=22 --strict
    $ echo $?
    4   # EXIT_NOT_FOUND -- the API answered 404
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or an unencodable body."""

EXIT_NOT_FOUND = 4
"""The requested resource was not found (HTTP 404)."""

EXIT_HTTP_ERROR = 5
"""The remote API answered with a non-2xx status other than 404."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_DECODE_ERROR = 7
"""The response body (or a cached value) was not valid JSON."""

EXIT_CACHE_ERROR = 8
"""The cache store could not be reached or rejected an operation."""

"""Person API error taxonomy.

Every failure in the person API client is raised as a subclass of PersonApiError so that
callers can handle the whole family with a single except clause.
"""

from typing import Optional


class PersonApiError(Exception):
    """Base class for all person API client errors."""


class ConfigurationError(PersonApiError):
    """Raised before any network call when the client or query is unusable.

    Covers missing credentials and lookups with no identifier set.
    """


class UnsupportedLookupError(ConfigurationError):
    """Raised for lookup keys that have no resolution path."""

    def __init__(self, lookup_type: str) -> None:
        super().__init__(f"Lookup by {lookup_type} is not supported")
        self.lookup_type = lookup_type


class AuthError(PersonApiError):
    """Raised when the client-credentials grant fails.

    The status is set when the token endpoint answered with an error status.
    """

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class TransportError(PersonApiError):
    """Raised when the Person API cannot be reached."""


class HTTPStatusError(PersonApiError):
    """Raised when the Person API responds with a status of 400 or above."""

    def __init__(self, status: int, url: str) -> None:
        super().__init__(f"Person API responded with status code {status}")
        self.status = status
        self.url = url


class DecodeError(PersonApiError):
    """Raised when a Person API response body is not a valid person document."""

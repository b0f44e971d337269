"""
Person API Client

This package implements the client side of the CIS Person API: acquiring access tokens
with the OAuth 2.0 client-credentials grant, issuing authenticated person lookups, and
normalizing the API's enveloped JSON into a stable Person record.

Key Components:
- token.py: Client-credentials token acquisition and caching
- client.py: Authenticated person lookups and HTTP outcome classification
- model.py: Person record and response normalization
- lookup.py: Lookup key selection from a partially filled identifier set
- errors.py: Error taxonomy shared by all of the above

Every failure is raised as a PersonApiError subclass. Nothing is retried; callers that
want retries retry the whole lookup.
"""

from org.mozilla.cis.person_api.client import PersonApiClient
from org.mozilla.cis.person_api.errors import (
    AuthError,
    ConfigurationError,
    DecodeError,
    HTTPStatusError,
    PersonApiError,
    TransportError,
    UnsupportedLookupError,
)
from org.mozilla.cis.person_api.lookup import (
    LookupKey,
    LookupQuery,
    LookupType,
    select_lookup,
)
from org.mozilla.cis.person_api.model import Person, parse_person
from org.mozilla.cis.person_api.token import AccessToken, ClientCredentials, TokenManager

__all__ = [
    "AccessToken",
    "AuthError",
    "ClientCredentials",
    "ConfigurationError",
    "DecodeError",
    "HTTPStatusError",
    "LookupKey",
    "LookupQuery",
    "LookupType",
    "Person",
    "PersonApiClient",
    "PersonApiError",
    "TokenManager",
    "TransportError",
    "UnsupportedLookupError",
    "parse_person",
    "select_lookup",
]

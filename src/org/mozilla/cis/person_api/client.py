"""Authenticated CIS Person API lookups.

Builds bearer-authenticated GET requests against the Person API, classifies the HTTP
outcome, and hands successful bodies to the response normalizer.
"""

import asyncio
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

from aiohttp import ClientError, ClientSession, ClientTimeout
from yarl import URL

from org.mozilla.cis.person_api.errors import (
    ConfigurationError,
    HTTPStatusError,
    TransportError,
    UnsupportedLookupError,
)
from org.mozilla.cis.person_api.lookup import LookupKey, LookupType
from org.mozilla.cis.person_api.model import Person, parse_person
from org.mozilla.cis.person_api.token import TokenManager

logger = logging.getLogger(__name__)


class PersonApiClient:
    """
    Client for the CIS Person API.

    One outbound request is made per lookup and nothing is retried. The access token is
    obtained lazily from the TokenManager before the first request and reused afterwards;
    a token rejected by the Person API surfaces as an HTTPStatusError.

    Args:
        http_session: HTTP session used for person lookups
        token_manager: Source of bearer tokens
        person_endpoint: Base URL of the Person API, e.g. https://person.api.sso.mozilla.com
        timeout: Optional per-request timeout for person lookups
    """

    def __init__(
        self,
        http_session: ClientSession,
        token_manager: TokenManager,
        person_endpoint: str,
        timeout: Optional[ClientTimeout] = None,
    ) -> None:
        self._http_session = http_session
        self._token_manager = token_manager
        self._person_endpoint = person_endpoint.rstrip("/")
        self._timeout = timeout

    @property
    def token_manager(self) -> TokenManager:
        return self._token_manager

    def person_url(self, email: str) -> URL:
        """Build the primary email lookup URL, escaping the email as a path segment."""
        return URL(
            f"{self._person_endpoint}/v2/user/primary_email/{quote(email, safe='@')}",
            encoded=True,
        )

    async def resolve(self, key: LookupKey) -> Person:
        """Resolve a person by lookup key.

        Only email lookups have a resolution path; other keys are rejected without any
        network interaction.

        Args:
            key: Lookup key selected for the query

        Returns:
            Person for the key

        Raises:
            UnsupportedLookupError: If the key is not an email key
            PersonApiError: For any failure while fetching or decoding the person
        """
        if key.lookup_type != LookupType.email:
            raise UnsupportedLookupError(key.lookup_type.name)
        return await self.get_person_by_email(key.value)

    async def get_person_by_email(self, email: str) -> Person:
        """Fetch a person by primary email address.

        Args:
            email: Primary email address of the person

        Returns:
            Person decoded from the response body

        Raises:
            ConfigurationError: If email is empty
            AuthError: If no access token could be acquired
            TransportError: If the Person API could not be reached
            HTTPStatusError: If the Person API responded with a status of 400 or above
            DecodeError: If the response body is not a person document
        """
        if email == "":
            raise ConfigurationError("An email address is required to look up a person")

        token = await self._token_manager.access_token()

        url = self.person_url(email)
        headers = {
            "Authorization": f"Bearer {token.access_token}",
            "Accept": "application/json",
        }
        request_kwargs: Dict[str, Any] = {}
        if self._timeout is not None:
            request_kwargs["timeout"] = self._timeout

        logger.debug("HTTP Request: GET %s", url)
        try:
            async with self._http_session.get(url, headers=headers, **request_kwargs) as resp:
                if resp.status >= 400:
                    logger.warning("Person API responded with status code %d for %s", resp.status, url)
                    raise HTTPStatusError(resp.status, str(url))
                body = await resp.read()
        except (ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"Unable to reach Person API at {url}: {e}") from e

        return parse_person(body)

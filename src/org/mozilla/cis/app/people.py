"""People lookup adapter.

Marshals an email/id/username query into a validated lookup, runs it against the Person
API, and flattens the resulting Person into the state record persisted by the caller.
"""

import logging
from typing import List, Optional

from aiohttp import ClientSession
from pydantic import BaseModel

from org.mozilla.cis.app.config import Settings
from org.mozilla.cis.person_api.client import PersonApiClient
from org.mozilla.cis.person_api.lookup import LookupKey, LookupQuery, select_lookup
from org.mozilla.cis.person_api.model import Person
from org.mozilla.cis.person_api.token import TokenManager

logger = logging.getLogger(__name__)


class PeopleState(BaseModel):
    """Flat people record.

    The query fields are echoed back as supplied and id is filled from the resolved
    person. Groups are sorted so that repeated reads produce identical state.
    """

    email: Optional[str] = None
    id: Optional[str] = None
    username: Optional[str] = None
    primary_username: str = ""
    github_username: Optional[str] = None
    groups: List[str] = list()

    @classmethod
    def from_person(cls, query: LookupQuery, person: Person) -> "PeopleState":
        return cls(
            email=query.email,
            id=person.user_id,
            username=query.username,
            primary_username=person.primary_username,
            github_username=person.github_username,
            groups=sorted(person.groups),
        )


def build_client(http_session: ClientSession, settings: Settings) -> PersonApiClient:
    """
    Build a Person API client from settings.

    Raises:
        ConfigurationError: If the Auth0 client ID or secret is not configured
    """
    timeout = settings.client_timeout()
    token_manager = TokenManager(http_session, settings.credentials(), timeout=timeout)
    return PersonApiClient(
        http_session, token_manager, settings.person_endpoint, timeout=timeout
    )


async def read_people(
    client: PersonApiClient, query: LookupQuery, key: Optional[LookupKey] = None
) -> PeopleState:
    """Look up the person identified by query.

    The query is validated before any network call is made. Callers that have already
    run select_lookup pass its result as key so the selection is not repeated.

    Raises:
        PersonApiError: If the query is invalid or the lookup fails
    """
    if key is None:
        key = select_lookup(query)
    person = await client.resolve(key)
    logger.info("Fetched data from people API for %s", key.lookup_type.name)
    return PeopleState.from_person(query, person)

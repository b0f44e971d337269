"""Lookup key selection.

Turns a partially filled identifier set into a single lookup key before any network
interaction takes place.
"""

from enum import IntEnum
import logging
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from org.mozilla.cis.person_api.errors import ConfigurationError

logger = logging.getLogger(__name__)


class LookupType(IntEnum):
    """Kind of identifier a person is looked up by.

    Only email lookups have a resolution path in the Person API client.
    """

    email = 1
    user_id = 2
    username = 3


class LookupKey(BaseModel):
    """A single identifier selected for a person lookup."""

    model_config = ConfigDict(frozen=True)

    lookup_type: LookupType
    value: str

    @classmethod
    def by_email(cls, email: str) -> "LookupKey":
        return cls(lookup_type=LookupType.email, value=email)

    @classmethod
    def by_id(cls, user_id: str) -> "LookupKey":
        return cls(lookup_type=LookupType.user_id, value=user_id)

    @classmethod
    def by_username(cls, username: str) -> "LookupKey":
        return cls(lookup_type=LookupType.username, value=username)


class LookupQuery(BaseModel):
    """Identifier set supplied by the caller. Any of the fields may be unset."""

    email: Optional[str] = None
    id: Optional[str] = None
    username: Optional[str] = None


# Order matters: the first identifier present wins.
_PRECEDENCE: Tuple[Tuple[LookupType, str], ...] = (
    (LookupType.email, "email"),
    (LookupType.user_id, "id"),
    (LookupType.username, "username"),
)


def select_lookup(query: LookupQuery) -> LookupKey:
    """Select the lookup key for a query.

    At least one of email, id, or username must be a non-empty string. Surrounding
    whitespace is stripped and a whitespace-only value counts as unset. When more than
    one identifier is set they are accepted, and the first in email, id, username order
    is used.

    Args:
        query: Caller supplied identifier set

    Returns:
        LookupKey for the selected identifier

    Raises:
        ConfigurationError: If no identifier is set
    """
    present: List[Tuple[LookupType, str, str]] = []
    for lookup_type, field_name in _PRECEDENCE:
        value = getattr(query, field_name)
        if value is not None and value.strip() != "":
            present.append((lookup_type, field_name, value.strip()))

    if len(present) == 0:
        raise ConfigurationError(
            "At least one of email, id, or username must be set to look up a person"
        )

    lookup_type, field_name, value = present[0]
    if len(present) > 1:
        ignored = ", ".join(name for _, name, _ in present[1:])
        logger.warning("Multiple identifiers set, looking up by %s and ignoring %s", field_name, ignored)

    return LookupKey(lookup_type=lookup_type, value=value)

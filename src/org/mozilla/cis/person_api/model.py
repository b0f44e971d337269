"""CIS person record and response normalization.

The Person API wraps scalar fields in a {"value": ...} envelope and collections in a
{"values": {...}} envelope. The models here unwrap both so that callers work with a flat
Person record. Fields the client does not use are ignored.
"""

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
)

from org.mozilla.cis.person_api.errors import DecodeError


def unwrap_envelope(v: Any, key: str) -> Any:
    """Return the contents of a {key: ...} envelope.

    A null envelope unwraps to None. Anything other than an object is rejected.
    """
    if v is None:
        return None
    if isinstance(v, dict):
        return v.get(key)
    raise ValueError(f"expected an object with a {key!r} field")


class ReadOnlyValues(BaseModel):
    """Base for {"values": {...}} collections.

    The mapping is exposed through a MappingProxyType, so a frozen Person cannot be
    changed through it. Nested objects inside the mapping are left as decoded.
    """

    model_config = ConfigDict(frozen=True)

    @field_validator("values", mode="before", check_fields=False)
    @classmethod
    def null_values(cls, v):
        return {} if v is None else v

    @field_validator("values", mode="after", check_fields=False)
    @classmethod
    def read_only_values(cls, v) -> Mapping[str, Any]:
        return MappingProxyType(dict(v))

    @field_serializer("values", check_fields=False)
    def serialize_values(self, v: Mapping[str, Any]) -> Dict[str, Any]:
        return dict(v)


class Usernames(ReadOnlyValues):
    """Platform usernames keyed by attribute name, e.g. github_username."""

    values: Mapping[str, Optional[str]] = Field(default_factory=dict, validate_default=True)

    @property
    def github_username(self) -> Optional[str]:
        return self.values.get("github_username")


class Mozilliansorg(ReadOnlyValues):
    """mozillians.org group memberships, keyed by group name.

    The per-group metadata is opaque to this client.
    """

    values: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @property
    def group_names(self) -> List[str]:
        """Group names in mapping iteration order. The order carries no meaning."""
        return list(self.values.keys())


class AccessInformation(BaseModel):
    model_config = ConfigDict(frozen=True)

    mozilliansorg: Mozilliansorg = Field(default_factory=Mozilliansorg)

    @field_validator("mozilliansorg", mode="before")
    @classmethod
    def null_mozilliansorg(cls, v):
        return {} if v is None else v


class Person(BaseModel):
    """Normalized CIS person.

    Built fresh for every successful lookup and never mutated afterwards. No semantic
    validation is applied; an empty user_id is passed through as-is.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str = ""
    primary_username: str = ""
    primary_email: str = ""
    usernames: Usernames = Field(default_factory=Usernames)
    access_information: AccessInformation = Field(default_factory=AccessInformation)

    @field_validator("user_id", "primary_username", "primary_email", mode="before")
    @classmethod
    def unwrap_value(cls, v):
        value = unwrap_envelope(v, "value")
        return "" if value is None else value

    @field_validator("usernames", "access_information", mode="before")
    @classmethod
    def null_object(cls, v):
        return {} if v is None else v

    @property
    def github_username(self) -> Optional[str]:
        return self.usernames.github_username

    @property
    def groups(self) -> List[str]:
        return self.access_information.mozilliansorg.group_names


def parse_person(body: bytes) -> Person:
    """Decode a Person API response body.

    Args:
        body: Raw response body

    Returns:
        Person built from the body

    Raises:
        DecodeError: If the body is not JSON or does not have the person shape
    """
    try:
        return Person.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"Unable to parse person response: {e}") from e

"""
Configuration Module for CIS People

This module defines the configuration for the Person API client, using Pydantic settings
loaded from environment variables.

Settings cover:
- The Auth0 token endpoint and machine-to-machine client registration
- The Person API endpoint
- Request timeouts
- Debugging and error reporting

Client credentials have no defaults. They are only required when a client is built, so
Settings can be loaded without them and the absence reported as a ConfigurationError by
Settings.credentials().
"""

from typing import Annotated, List, Optional
import logging

from aiohttp import ClientTimeout
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

from org.mozilla.cis.person_api.errors import ConfigurationError
from org.mozilla.cis.person_api.token import ClientCredentials

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings for the CIS People client.

    Environment variables are mapped to settings fields by name, for example
    AUTH0_CLIENT_ID sets auth0_client_id.
    """

    debug: bool = False
    """
    Enable debug logging.
    Set with DEBUG=true environment variable.
    """

    sentry_dsn: Optional[str] = None
    """
    Sentry DSN for error reporting. Optional, no error reporting if not set.
    Set with SENTRY_DSN environment variable.
    """

    auth0_endpoint: str = "https://auth.mozilla.auth0.com/oauth/token"
    """
    Auth0 token endpoint. A bare hostname is expanded to https://{hostname}/oauth/token.
    Set with AUTH0_ENDPOINT environment variable.
    """

    auth0_client_id: Optional[str] = None
    """
    Auth0 machine-to-machine client ID (required to build a client).
    Set with AUTH0_CLIENT_ID environment variable.
    """

    auth0_client_secret: Optional[str] = None
    """
    Auth0 machine-to-machine client secret (required to build a client).
    Set with AUTH0_CLIENT_SECRET environment variable.
    """

    auth0_audience: str = "api.sso.mozilla.com"
    """
    Audience the access token is requested for.
    Set with AUTH0_AUDIENCE environment variable.
    """

    auth0_scopes: Annotated[List[str], NoDecode] = list()
    """
    Scopes requested with the access token.
    Set with AUTH0_SCOPES environment variable as comma or space separated values.
    """

    person_endpoint: str = "https://person.api.sso.mozilla.com"
    """
    Base URL of the CIS Person API. A bare hostname is expanded to https://{hostname}.
    Set with PERSON_ENDPOINT environment variable.
    """

    http_timeout: float = 30.0
    """
    Total timeout in seconds for each outbound HTTP request.
    Set with HTTP_TIMEOUT environment variable.
    """

    @field_validator("auth0_scopes", mode="before")
    @classmethod
    def decode_auth0_scopes(cls, v) -> List[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return [scope for scope in v.replace(",", " ").split() if scope]
        return v

    @field_validator("auth0_endpoint", mode="after")
    @classmethod
    def expand_auth0_endpoint(cls, v: str) -> str:
        if "://" not in v:
            return f"https://{v.strip('/')}/oauth/token"
        return v

    @field_validator("person_endpoint", mode="after")
    @classmethod
    def expand_person_endpoint(cls, v: str) -> str:
        if "://" not in v:
            v = f"https://{v}"
        return v.rstrip("/")

    def credentials(self) -> ClientCredentials:
        """
        Build the client-credentials registration from these settings.

        Returns:
            ClientCredentials: The registration used by the TokenManager

        Raises:
            ConfigurationError: If the client ID or client secret is not set
        """
        missing = []
        if not self.auth0_client_id:
            missing.append("AUTH0_CLIENT_ID")
        if not self.auth0_client_secret:
            missing.append("AUTH0_CLIENT_SECRET")
        if len(missing) > 0:
            raise ConfigurationError(
                f"Missing Auth0 client credentials: set {' and '.join(missing)}"
            )

        return ClientCredentials(
            client_id=self.auth0_client_id,
            client_secret=self.auth0_client_secret,
            audience=self.auth0_audience,
            token_endpoint=self.auth0_endpoint,
            scopes=tuple(self.auth0_scopes),
        )

    def client_timeout(self) -> ClientTimeout:
        return ClientTimeout(total=self.http_timeout)

"""OAuth 2.0 client-credentials token acquisition.

The Person API accepts Auth0 access tokens issued to machine-to-machine clients. The
TokenManager performs the client-credentials grant (RFC 6749 section 4.4) against the
Auth0 token endpoint and caches the resulting token for reuse by later requests.

Expiry is recorded but not checked: a cached token is reused until a caller invalidates
it or explicitly acquires a new one.
"""

import asyncio
from datetime import datetime, timedelta, timezone
import logging
from typing import Any, Dict, Optional, Tuple

from aiohttp import ClientError, ClientSession, ClientTimeout
from pydantic import BaseModel, ConfigDict, Field

from org.mozilla.cis.person_api.errors import AuthError

logger = logging.getLogger(__name__)


class ClientCredentials(BaseModel):
    """Machine-to-machine client registration used for the grant."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str = Field(repr=False)
    audience: str
    token_endpoint: str
    scopes: Tuple[str, ...] = ()


class AccessToken(BaseModel):
    """Bearer token returned by a successful grant."""

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(repr=False)
    token_type: str = "Bearer"
    expires_at: Optional[datetime] = None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        if now is None:
            now = datetime.now(timezone.utc)
        return now >= self.expires_at


class TokenManager:
    """
    Acquires and holds a single client-credentials access token.

    The cached token is guarded by an asyncio.Lock, so concurrent lookups that find no
    token share one grant instead of each performing their own.

    Args:
        http_session: HTTP session used for the token request
        credentials: Client registration to authenticate with
        timeout: Optional per-request timeout for the token request
    """

    def __init__(
        self,
        http_session: ClientSession,
        credentials: ClientCredentials,
        timeout: Optional[ClientTimeout] = None,
    ) -> None:
        self._http_session = http_session
        self._credentials = credentials
        self._timeout = timeout
        self._token: Optional[AccessToken] = None
        self._lock = asyncio.Lock()

    async def access_token(self) -> AccessToken:
        """Return the cached token, acquiring one first if none is held."""
        async with self._lock:
            if self._token is None:
                self._token = await self._grant()
            return self._token

    async def acquire(self) -> AccessToken:
        """Perform a new grant and cache the result.

        Any previously cached token is dropped first, so a failed grant leaves the
        manager without a token.

        Raises:
            AuthError: If the grant fails for any reason
        """
        async with self._lock:
            self._token = None
            self._token = await self._grant()
            return self._token

    def invalidate(self) -> None:
        """Drop the cached token so that the next lookup performs a new grant."""
        self._token = None

    def _form_data(self) -> Dict[str, str]:
        data = {
            "grant_type": "client_credentials",
            "client_id": self._credentials.client_id,
            "client_secret": self._credentials.client_secret,
            "audience": self._credentials.audience,
        }
        if len(self._credentials.scopes) > 0:
            data["scope"] = " ".join(self._credentials.scopes)
        return data

    async def _grant(self) -> AccessToken:
        token_endpoint = self._credentials.token_endpoint
        request_kwargs: Dict[str, Any] = {}
        if self._timeout is not None:
            request_kwargs["timeout"] = self._timeout

        try:
            async with self._http_session.post(
                token_endpoint,
                data=self._form_data(),
                headers={"Accept": "application/json"},
                **request_kwargs,
            ) as resp:
                if not 200 <= resp.status < 300:
                    body = await resp.text()
                    raise AuthError(
                        f"Token endpoint responded with status code {resp.status}: {body}",
                        status=resp.status,
                    )
                payload = await resp.json(content_type=None)
        except (ClientError, asyncio.TimeoutError) as e:
            raise AuthError(f"Unable to reach token endpoint {token_endpoint}: {e}") from e
        except ValueError as e:
            raise AuthError(f"Unable to parse token response: {e}") from e

        if not isinstance(payload, dict):
            raise AuthError("Token response is not a JSON object")

        access_token = payload.get("access_token", None)
        if not isinstance(access_token, str) or access_token == "":
            raise AuthError("Token response is missing access_token")

        expires_in = payload.get("expires_in", None)
        expires_at: Optional[datetime] = None
        if isinstance(expires_in, (int, float)) and expires_in > 0:
            expires_at = datetime.now(timezone.utc) + timedelta(0, expires_in)

        logger.info(
            "Acquired access token from %s for audience %s (expires_in=%s)",
            token_endpoint,
            self._credentials.audience,
            expires_in,
        )

        return AccessToken(
            access_token=access_token,
            token_type=payload.get("token_type", None) or "Bearer",
            expires_at=expires_at,
        )

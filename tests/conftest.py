"""
Shared test configuration and fixtures for the Person API client tests.

Provides mocked aiohttp sessions, client credentials, and environment isolation for
settings used across the test modules.
"""

from unittest.mock import AsyncMock

import pytest
from aiohttp import ClientSession

from org.mozilla.cis.person_api.token import ClientCredentials
from tests.test_helpers import SAMPLE_PERSON, attach_response, make_response, token_body

SETTINGS_ENV_VARS = (
    "DEBUG",
    "SENTRY_DSN",
    "AUTH0_ENDPOINT",
    "AUTH0_CLIENT_ID",
    "AUTH0_CLIENT_SECRET",
    "AUTH0_AUDIENCE",
    "AUTH0_SCOPES",
    "PERSON_ENDPOINT",
    "HTTP_TIMEOUT",
    "LOGGING_CONFIG_FILE",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every settings environment variable for the duration of a test."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def credentials():
    """Client registration used for token requests."""
    return ClientCredentials(
        client_id="client-id",
        client_secret="client-secret",
        audience="api.sso.mozilla.com",
        token_endpoint="https://auth.example.com/oauth/token",
        scopes=("classification:public", "display:all"),
    )


@pytest.fixture
def token_response():
    """Successful token endpoint response."""
    return make_response(json_body=token_body())


@pytest.fixture
def person_response():
    """Successful Person API response carrying SAMPLE_PERSON."""
    return make_response(json_body=SAMPLE_PERSON)


@pytest.fixture
def mock_session(token_response, person_response):
    """HTTP session answering token POSTs and person GETs successfully."""
    session = AsyncMock(spec=ClientSession)
    attach_response(session.post, token_response)
    attach_response(session.get, person_response)
    return session

"""
Unit tests for the command line entry point in org.mozilla.cis.app.cli

Tests cover argument parsing, logging configuration, and exit codes for successful and
failed lookups.
"""

import json
import logging
from unittest.mock import AsyncMock, patch

import pytest

from org.mozilla.cis.app.cli import configure_logging, invoke, parse_args, realMain
from org.mozilla.cis.app.config import Settings
from org.mozilla.cis.app.people import PeopleState
from org.mozilla.cis.person_api.errors import HTTPStatusError
from org.mozilla.cis.person_api.lookup import LookupKey, LookupQuery


@pytest.fixture
def settings(clean_env):
    return Settings(auth0_client_id="client-id", auth0_client_secret="client-secret")


@pytest.fixture
def root_logger():
    """Restore the root logger level and handlers after a test reconfigures logging."""
    root = logging.getLogger()
    level = root.level
    handlers = root.handlers[:]
    yield root
    root.setLevel(level)
    root.handlers[:] = handlers


class TestParseArgs:
    """Test suite for parse_args function."""

    def test_parse_all(self):
        args = parse_args(["--email", "jdoe@mozilla.com", "--id", "u1", "--username", "jdoe"])
        assert args.email == "jdoe@mozilla.com"
        assert args.id == "u1"
        assert args.username == "jdoe"

    def test_parse_none(self):
        args = parse_args([])
        assert args.email is None
        assert args.id is None
        assert args.username is None


class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def test_debug_level(self, clean_env, root_logger):
        configure_logging(debug=True)
        assert logging.getLogger().level == logging.DEBUG

    def test_info_level(self, clean_env, root_logger):
        configure_logging(debug=False)
        assert logging.getLogger().level == logging.INFO

    def test_config_file(self, clean_env, root_logger, tmp_path):
        config_file = tmp_path / "logging.json"
        config_file.write_text(
            json.dumps(
                {
                    "version": 1,
                    "disable_existing_loggers": False,
                    "root": {"level": "WARNING"},
                }
            )
        )
        clean_env.setenv("LOGGING_CONFIG_FILE", str(config_file))

        configure_logging(debug=True)

        assert logging.getLogger().level == logging.WARNING


class TestRealMain:
    """Test suite for realMain function."""

    @patch("org.mozilla.cis.app.cli.read_people", new_callable=AsyncMock)
    async def test_success(self, mock_read_people, settings, capsys):
        mock_read_people.return_value = PeopleState(
            email="jdoe@mozilla.com", id="u1", primary_username="p1", groups=["nda"]
        )

        code = await realMain(settings, LookupQuery(email="jdoe@mozilla.com"))

        assert code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["id"] == "u1"
        assert output["groups"] == ["nda"]
        mock_read_people.assert_awaited_once()
        assert mock_read_people.call_args.args[2] == LookupKey.by_email("jdoe@mozilla.com")

    @patch("org.mozilla.cis.app.cli.sentry_sdk")
    @patch("org.mozilla.cis.app.cli.read_people", new_callable=AsyncMock)
    async def test_lookup_failure(self, mock_read_people, mock_sentry, settings):
        error = HTTPStatusError(404, "https://person.example.com/v2/user/primary_email/x")
        mock_read_people.side_effect = error

        code = await realMain(settings, LookupQuery(email="x"))

        assert code == 1
        mock_sentry.capture_exception.assert_called_once_with(error)

    @patch("org.mozilla.cis.app.cli.aiohttp.ClientSession")
    @patch("org.mozilla.cis.app.cli.sentry_sdk")
    async def test_empty_query(self, mock_sentry, mock_client_session, settings):
        """Test an empty query fails before a session is opened."""
        code = await realMain(settings, LookupQuery())

        assert code == 1
        mock_client_session.assert_not_called()
        mock_sentry.capture_exception.assert_called_once()

    @patch("org.mozilla.cis.app.cli.aiohttp.ClientSession")
    @patch("org.mozilla.cis.app.cli.sentry_sdk")
    async def test_missing_credentials(self, mock_sentry, mock_client_session, clean_env):
        code = await realMain(Settings(), LookupQuery(email="jdoe@mozilla.com"))

        assert code == 1
        mock_client_session.assert_not_called()

    @patch("org.mozilla.cis.app.cli.aiohttp.ClientSession")
    async def test_multiple_identifiers_warn_once(
        self, mock_client_session, mock_session, settings, caplog, capsys
    ):
        """Test the ignored identifiers are reported once per lookup."""
        mock_client_session.return_value.__aenter__.return_value = mock_session
        query = LookupQuery(email="jdoe@mozilla.com", username="jdoe")

        with caplog.at_level(logging.WARNING):
            code = await realMain(settings, query)

        assert code == 0
        assert caplog.text.count("Multiple identifiers set") == 1
        assert json.loads(capsys.readouterr().out)["id"] == "u1"


class TestInvoke:
    """Test suite for invoke function."""

    @patch("org.mozilla.cis.app.cli.sentry_sdk")
    @patch("org.mozilla.cis.app.cli.realMain", new_callable=AsyncMock)
    def test_invoke_exit_code(self, mock_real_main, mock_sentry, clean_env, root_logger):
        clean_env.setenv("SENTRY_DSN", "https://key@sentry.example.com/1")
        mock_real_main.return_value = 0

        with pytest.raises(SystemExit) as exc_info:
            invoke(["--email", "jdoe@mozilla.com"])

        assert exc_info.value.code == 0
        mock_sentry.init.assert_called_once_with(dsn="https://key@sentry.example.com/1")
        settings, query = mock_real_main.call_args.args
        assert isinstance(settings, Settings)
        assert query == LookupQuery(email="jdoe@mozilla.com")

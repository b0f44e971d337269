from typing import List, Optional
import argparse
import asyncio
import json
import logging
from logging.config import dictConfig
import os
import sys

import aiohttp
import sentry_sdk

from org.mozilla.cis.app.config import Settings
from org.mozilla.cis.app.people import build_client, read_people
from org.mozilla.cis.person_api.errors import PersonApiError
from org.mozilla.cis.person_api.lookup import LookupQuery, select_lookup

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False):
    logging_config_file = os.getenv("LOGGING_CONFIG_FILE", "")

    if len(logging_config_file) > 0:
        with open(logging_config_file) as fl:
            dictConfig(json.load(fl))
        return

    logging.basicConfig()
    logging.getLogger().setLevel(logging.DEBUG if debug else logging.INFO)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cis-people", description="Look up a person in the CIS Person API"
    )
    parser.add_argument("--email", help="Primary email address of the person.")
    parser.add_argument("--id", help="CIS user ID of the person.")
    parser.add_argument("--username", help="Primary username of the person.")
    return parser.parse_args(argv)


async def realMain(settings: Settings, query: LookupQuery) -> int:
    try:
        # Reject bad queries and missing credentials before opening a session.
        key = select_lookup(query)
        settings.credentials()

        async with aiohttp.ClientSession() as http_session:
            client = build_client(http_session, settings)
            state = await read_people(client, query, key)
    except PersonApiError as e:
        logger.error("Unable to read people: %s", e)
        sentry_sdk.capture_exception(e)
        return 1

    print(state.model_dump_json(indent=2))
    return 0


def invoke(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    settings = Settings()
    configure_logging(settings.debug)

    if settings.sentry_dsn is not None:
        sentry_sdk.init(dsn=settings.sentry_dsn)

    query = LookupQuery(email=args.email, id=args.id, username=args.username)
    sys.exit(asyncio.run(realMain(settings, query)))


if __name__ == "__main__":
    invoke()

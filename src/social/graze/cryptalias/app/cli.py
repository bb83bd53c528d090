import os
import logging
from logging.config import dictConfig
import json
import sentry_sdk
from sentry_sdk.integrations.aiohttp import AioHttpIntegration

from social.graze.cryptalias.app.config import Settings


def configure_logging(debug: bool = False):
    logging_config_file = os.getenv("LOGGING_CONFIG_FILE", "")

    if len(logging_config_file) > 0:
        with open(logging_config_file) as fl:
            dictConfig(json.load(fl))
        return

    debug = debug or os.getenv("DEBUG", "").lower() in ("1", "true", "yes")
    logging.basicConfig()
    logging.getLogger().setLevel(logging.DEBUG if debug else logging.INFO)


def configure_sentry(settings: Settings) -> bool:
    if settings.sentry_dsn is None:
        return False

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        send_default_pii=False,
        integrations=[AioHttpIntegration()],
    )
    return True

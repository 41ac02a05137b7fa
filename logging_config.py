"""logging_config.py - Root logger setup, called once when the app module loads."""

import logging

from config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    resolved = getattr(logging, (level or "INFO").upper(), logging.INFO)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger().setLevel(resolved)

    # requests/urllib3 log every connection at DEBUG
    logging.getLogger("urllib3").setLevel(max(resolved, logging.WARNING))

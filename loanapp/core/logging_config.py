"""Logging setup for the API process."""

import logging

from loanapp.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once, using LOG_LEVEL unless overridden."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    # SQL echo is controlled by the engine, keep the logger quiet otherwise
    if settings.ENVIRONMENT != "development":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

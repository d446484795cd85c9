"""Standard library logging for route-level messages.

Structured domain events go through Logfire instead, see
``wildlanka.util.observability``.
"""

import logging
import sys

from wildlanka.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Libraries that log every request or statement at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "uvicorn.access")


def log_level(settings: Settings) -> int:
    """Root log level for the environment."""
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "test":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure the root logger to write to stdout.

    Args:
        settings: Application settings
    """
    level = log_level(settings)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.getLogger(__name__).info(
        f"Logging configured: environment={settings.environment}, "
        f"level={logging.getLevelName(level)}"
    )

"""Standard library logging setup.

Huddle's own events go through logfire; this only sets levels and the
format for uvicorn, SQLAlchemy and other libraries that log via
``logging``.
"""

import logging
import sys

from huddle.config import Settings

_QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "asyncio")


def _level_for(settings: Settings) -> int:
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "test":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure the root logger for the environment.

    Args:
        settings: Application settings
    """
    level = _level_for(settings)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        stream=sys.stdout,
        force=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("huddle").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured for %s at %s",
        settings.environment,
        logging.getLevelName(level),
    )

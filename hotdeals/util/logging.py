"""Standard library logging setup.

Application code logs through logfire. Libraries underneath (uvicorn,
alembic, sqlalchemy, asyncpg) log through ``logging``; their records go to
stdout and are forwarded to logfire so they land next to our spans.
"""

import logging
import sys

import logfire

from hotdeals.config import Settings

# Library loggers and the lowest level worth keeping from each
LIBRARY_LEVELS = {
    "sqlalchemy.engine": logging.WARNING,
    "asyncpg": logging.WARNING,
    "uvicorn.access": logging.WARNING,
    "alembic": logging.INFO,
}


def log_level(settings: Settings) -> int:
    """Root level for the environment: DEBUG when debugging, WARNING in tests."""
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "test":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure the root logger for scripts and the server.

    Args:
        settings: Application settings
    """
    level = log_level(settings)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logfire.LogfireLoggingHandler(),
        ],
        force=True,
    )

    for name, library_level in LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(max(level, library_level))

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )

"""Package logging: a single stderr handler on the ``apicall`` logger, level from the environment."""

import logging
import os

LOG_LEVEL_ENV = "APICALL_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
PACKAGE_LOGGER = "apicall"


def _resolve_log_level() -> int:
    level = logging.getLevelName(os.getenv(LOG_LEVEL_ENV, "WARNING").upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: int | None = None) -> logging.Logger:
    """Attach the stderr handler once; an explicit ``level`` always wins over the environment."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
        package_logger.propagate = False
        package_logger.setLevel(_resolve_log_level())
    if level is not None:
        package_logger.setLevel(level)
    return package_logger


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")

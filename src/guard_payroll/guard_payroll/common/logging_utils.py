from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Root of the package loggers, whichever import path the package was loaded from.
PACKAGE_LOGGER = __name__.rsplit(".", 2)[0]


def configure_logging(level: str = "INFO") -> None:
    """Configure the package logger once; repeated calls only adjust the level."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

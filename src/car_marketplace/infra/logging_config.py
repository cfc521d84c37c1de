"""Console logging setup for the service."""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "car_marketplace"


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    """
    Attach a console handler to the package logger.

    Safe to call more than once: the handler is only added the first time.

    Args:
        level: Log level name or number

    Returns:
        The package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)

    return logger

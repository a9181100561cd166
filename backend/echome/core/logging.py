"""Logging setup for the echo service."""
import logging

from .config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Calling this more than once only updates the level, so the app factory
    and the serverless entrypoint can both call it safely.
    """
    package_logger = logging.getLogger("echome")
    package_logger.setLevel(settings.LOG_LEVEL.upper())

    if not any(getattr(h, "_echome_handler", False) for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._echome_handler = True
        package_logger.addHandler(handler)

    return package_logger

# utils/logger.py
import logging

from config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging() -> logging.Logger:
    """
    Configure console logging for the application.

    Module loggers (logging.getLogger(__name__)) propagate to the root logger
    configured here.
    """
    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL.upper())

    logger = logging.getLogger("fabloom")

    # Avoid duplicate handlers if setup_logging() is called multiple times
    if root.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)

    logger.info("Logging initialized (level %s)", settings.LOG_LEVEL.upper())
    return logger

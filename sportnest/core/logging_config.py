"""Logging configuration for the application."""

import logging
import sys

from sportnest.core.config import LOG_LEVEL


def setup_logging(level: str = LOG_LEVEL):
    """Configure logging for the application."""
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    # Keep whatever handlers the host process (uvicorn, pytest) installed
    if not root_logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # Set higher log levels for noisy components
    logging.getLogger('pymongo').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('passlib').setLevel(logging.ERROR)

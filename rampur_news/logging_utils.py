"""
Logging setup

Console logging for the `rampur_news` package loggers and the Flask app
logger, sharing one handler and format.
"""

import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(app=None, log_level=logging.INFO):
    """Set up logging for the package and, when given, the Flask app."""
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(LOG_FORMAT))

    package_logger = logging.getLogger('rampur_news')
    package_logger.setLevel(log_level)
    package_logger.handlers = []  # Clear existing handlers
    package_logger.addHandler(console)

    if app:
        app.logger.handlers = []
        app.logger.addHandler(console)
        app.logger.setLevel(log_level)

    return package_logger

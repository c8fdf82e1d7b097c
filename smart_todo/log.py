"""Logging setup for hosts that drive smart_todo from a scheduled job."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import Config

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOGGER_NAME = "smart_todo"


def setup_logging(config: Config) -> logging.Logger:
    """Attach handlers to the package logger according to ``config.logging``.

    Always logs to stderr; also logs to a rotating file when ``logging.file``
    is set. Calling it again replaces the handlers instead of stacking them.
    """
    settings = config.logging_settings
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.get("level", "INFO"))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    log_file = settings.get("file")
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=settings.get("max_bytes", 1024 * 1024),
            backupCount=settings.get("backup_count", 2),
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    return logger

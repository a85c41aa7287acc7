"""Logging setup for hotel-access.

The API and the CLI configure one package logger, ``hotelaccess``; every
module logs through ``logging.getLogger(__name__)`` and propagates to it.
Console output is always on. A size-rotated file under ``log_dir`` is added
when the deployment asks for it (``HOTEL_ACCESS_LOG_TO_FILE``).
"""

import logging
import logging.handlers
import os


VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Access decisions are chatty at INFO; keep a few small files
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3


def _rotating_file_handler(log_dir: str, name: str) -> logging.Handler:
    os.makedirs(log_dir, exist_ok=True)
    return logging.handlers.RotatingFileHandler(
        os.path.join(log_dir, f"{name}.log"),
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
    )


def setup_logger(
    name: str,
    level: str = "INFO",
    log_dir: str = "/var/log/hotel-access",
    file_logging: bool = False,
) -> logging.Logger:
    """Configure the named logger for the API or the CLI.

    Calling it again only changes the level, so an app reload or a second
    CLI run in the same process does not stack handlers.

    Raises:
        ValueError: If ``level`` is not one of VALID_LEVELS
    """
    level_upper = level.upper()
    if level_upper not in VALID_LEVELS:
        raise ValueError(
            f"Invalid log level: {level}. Must be one of: {', '.join(VALID_LEVELS)}"
        )

    logger = logging.getLogger(name)
    logger.setLevel(level_upper)
    if logger.handlers:
        return logger

    handlers = [logging.StreamHandler()]
    if file_logging:
        handlers.append(_rotating_file_handler(log_dir, name))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger

# logger.py
"""
Logging setup for the extractor service and API.

Console output always; a daily rotating file is added when log_file is given.
Library modules only call logging.getLogger(__name__) and never configure handlers.
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: Optional[str] = None,
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    retention_days: int = 30,
) -> logging.Logger:
    """
    Configure and return a logger.

    Args:
        name: Logger name (root logger if None)
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_file: Optional path for a midnight-rotated log file
        retention_days: Rotated files to keep

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure once
    if logger.handlers:
        return logger

    level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            filename=log_file,
            when="midnight",
            interval=1,
            backupCount=retention_days,
            encoding="utf-8",
        )
        file_handler.suffix = "%Y-%m-%d"
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger

"""
Logging setup

Shared logging configuration for the web service and command-line use.
- console: stdout at the level passed in (the web app uses settings.yaml
  `logging.level`, INFO by default)
- file: logs/web/web.log for the web app, logs/<name>.log otherwise; at
  the file level passed in, rotated at midnight and kept 7 days

Usage:
    from core.logging import setup_logging
    setup_logging("web")
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Paths


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 7  # days

# Loggers turned down to WARNING
NOISY_LOGGERS = [
    "httpcore",        # connection details
    "httpx",           # one line per request
    "asyncio",
    "uvicorn.access",  # one line per request
]


def get_log_file_path(process_name: str) -> Path:
    """Log file for a process ("web" logs under logs/web/)"""
    if process_name == "web":
        return Paths.WEB_LOGS_DIR / f"{process_name}.log"
    return Paths.LOGS_DIR / f"{process_name}.log"


def setup_logging(
    process_name: str,
    console_level: int = logging.INFO,
    file_level: int = logging.INFO,
) -> logging.Logger:
    """Configure the root logger

    Console output plus a daily rotating file per process.

    Args:
        process_name: process name ("web", or anything else for logs/)
        console_level: console log level
        file_level: file log level

    Returns:
        The configured root logger
    """
    log_file = get_log_file_path(process_name)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # handlers filter

    # Avoid duplicate handlers on re-init
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    file_handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        interval=1,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.suffix = "%Y-%m-%d"  # web.log.2026-02-21
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.info(f"Logging initialised: {process_name}")
    root_logger.info(f"  - console: {logging.getLevelName(console_level)}")
    root_logger.info(f"  - file: {log_file} ({logging.getLevelName(file_level)}, daily rotation)")
    root_logger.info(f"  - retention: {LOG_FILE_BACKUP_COUNT} days")

    return root_logger

"""
Logging setup for the Hydrology Events API.

Everything goes through the root logger: records are printed to stdout and
written to a rotating log file under ``LOG_DIR``, while errors are also kept
in a file of their own so failed queries are easy to find.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from app.config import settings

LOG_FILE = "hydrology_api.log"
ERROR_LOG_FILE = "hydrology_api_errors.log"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite")


def _formatter() -> logging.Formatter:
    if settings.DEBUG:
        fmt = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    else:
        fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    return logging.Formatter(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")


def _rotating_file(path: Path, level: int, formatter: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging() -> logging.Logger:
    """
    Install the stdout, log file and error file handlers on the root logger.

    Calling it again replaces the handlers instead of stacking them. The
    format includes the calling function and line when ``DEBUG`` is on.

    Returns:
        The root logger
    """
    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL)
    root.handlers.clear()

    formatter = _formatter()

    stdout = logging.StreamHandler(sys.stdout)
    stdout.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    stdout.setFormatter(formatter)
    root.addHandler(stdout)

    root.addHandler(_rotating_file(log_dir / LOG_FILE, logging.INFO, formatter))
    root.addHandler(_rotating_file(log_dir / ERROR_LOG_FILE, logging.ERROR, formatter))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root.info(
        "Logging ready (level=%s, debug=%s, dir=%s)",
        settings.LOG_LEVEL, settings.DEBUG, log_dir,
    )
    return root


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass ``__name__``."""
    return logging.getLogger(name)

"""
logger.py

Application logging for agilizer_jira.

`get_logger()` returns the `agilizer_jira` logger, attaching its handlers on
the first call only:

- stdout, at `logging.console_level` from config.yaml (DEBUG when unset),
  with a short time/level/message layout;
- `<paths.logs_dir>/agilizer_jira.log` at INFO, with the emitting module,
  function and line number.

Modules log through `logging.getLogger(__name__)`. Being children of
`agilizer_jira`, their records end up on the same handlers.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from agilizer_jira.config import config

_APP_LOGGER_NAME = "agilizer_jira"
_DEFAULT_LOG_DIR = "./logs"
_DEFAULT_LOG_FILENAME = "agilizer_jira.log"

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
CONSOLE_DATE_FORMAT = "%H:%M:%S"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s"

_logger_instance: Optional[logging.Logger] = None


def _section(name: str) -> dict:
    return config.get(name) or {}


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(_section("logging").get("console_level") or logging.DEBUG)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=CONSOLE_DATE_FORMAT))
    return handler


def _file_handler(logs_dir: str) -> logging.Handler:
    """
    Raises:
        OSError: If the directory or the log file cannot be created.
    """
    directory = Path(logs_dir)
    directory.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(directory / _DEFAULT_LOG_FILENAME, encoding="utf-8")
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def get_logger() -> logging.Logger:
    """
    Returns the configured application logger, setting it up on first use.

    An unwritable log directory is reported on the console and leaves the
    logger with console output only.
    """
    global _logger_instance
    if _logger_instance is not None:
        return _logger_instance

    app_logger = logging.getLogger(_APP_LOGGER_NAME)
    app_logger.setLevel(logging.DEBUG)
    app_logger.handlers.clear()
    app_logger.addHandler(_console_handler())

    logs_dir = _section("paths").get("logs_dir") or _DEFAULT_LOG_DIR
    try:
        app_logger.addHandler(_file_handler(logs_dir))
    except OSError as e:
        app_logger.error(f"Cannot write logs under '{logs_dir}' ({e}); logging to console only.")

    _logger_instance = app_logger
    return _logger_instance

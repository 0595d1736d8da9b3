"""
Tests for the application logger (src/agilizer_jira/utils/logger.py).
"""

import logging
from unittest.mock import patch

import pytest

from agilizer_jira.utils import logger as logger_module


@pytest.fixture
def fresh_logger():
    """Forces `get_logger` to run its setup again and cleans up handlers."""
    saved = logger_module._logger_instance
    logger_module._logger_instance = None
    yield
    app_logger = logging.getLogger(logger_module._APP_LOGGER_NAME)
    for handler in app_logger.handlers:
        handler.close()
    app_logger.handlers.clear()
    logger_module._logger_instance = saved


def test_get_logger_returns_singleton(fresh_logger, tmp_path):
    with patch.dict(logger_module.config, {"paths": {"logs_dir": str(tmp_path)}}):
        first = logger_module.get_logger()
        second = logger_module.get_logger()

    assert first is second
    assert first.name == "agilizer_jira"


def test_handlers_are_configured(fresh_logger, tmp_path):
    with patch.dict(logger_module.config, {"paths": {"logs_dir": str(tmp_path)}, "logging": {}}):
        app_logger = logger_module.get_logger()

    handler_types = {type(h) for h in app_logger.handlers}
    assert logging.StreamHandler in handler_types
    assert logging.FileHandler in handler_types
    assert (tmp_path / "agilizer_jira.log").exists()


def test_module_loggers_reach_the_log_file(fresh_logger, tmp_path):
    with patch.dict(logger_module.config, {"paths": {"logs_dir": str(tmp_path)}, "logging": {}}):
        app_logger = logger_module.get_logger()

    logging.getLogger("agilizer_jira.db.store").info("pool opened")
    for handler in app_logger.handlers:
        handler.flush()

    assert "pool opened" in (tmp_path / "agilizer_jira.log").read_text(encoding="utf-8")


def test_unwritable_log_dir_disables_file_logging(fresh_logger, tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("")

    with patch.dict(logger_module.config, {"paths": {"logs_dir": str(blocker / "logs")}, "logging": {}}):
        app_logger = logger_module.get_logger()

    assert all(not isinstance(h, logging.FileHandler) for h in app_logger.handlers)


def test_console_level_comes_from_config(fresh_logger, tmp_path):
    settings = {"paths": {"logs_dir": str(tmp_path)}, "logging": {"console_level": "WARNING"}}
    with patch.dict(logger_module.config, settings):
        app_logger = logger_module.get_logger()

    (console,) = [h for h in app_logger.handlers if type(h) is logging.StreamHandler]
    (log_file,) = [h for h in app_logger.handlers if isinstance(h, logging.FileHandler)]
    assert console.level == logging.WARNING
    assert log_file.level == logging.INFO


def test_console_defaults_to_debug(fresh_logger, tmp_path):
    with patch.dict(logger_module.config, {"paths": {"logs_dir": str(tmp_path)}, "logging": None}):
        app_logger = logger_module.get_logger()

    (console,) = [h for h in app_logger.handlers if type(h) is logging.StreamHandler]
    assert console.level == logging.DEBUG

"""
Unit tests for config/logging_config.py
"""
import logging
import logging.handlers

import pytest

from config.logging_config import setup_logger


@pytest.fixture
def logger_name(request):
    name = f"docstyle.test.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestSetupLogger:
    """Test handler setup."""

    def test_console_only_by_default(self, logger_name, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        logger = setup_logger(logger_name)
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0], logging.handlers.RotatingFileHandler)
        assert not (temp_dir / "logs").exists()

    def test_log_file_created_on_request(self, logger_name, temp_dir):
        log_file = temp_dir / "logs" / "docstyle.log"
        logger = setup_logger(logger_name, log_file=log_file)
        logger.warning("written")
        for handler in logger.handlers:
            handler.flush()
        assert "written" in log_file.read_text(encoding="utf-8")

    def test_handlers_not_duplicated(self, logger_name, temp_dir):
        log_file = temp_dir / "docstyle.log"
        setup_logger(logger_name)
        setup_logger(logger_name, log_file=log_file)
        logger = setup_logger(logger_name, log_file=log_file)
        assert len(logger.handlers) == 2

"""Tests for logger setup."""

import json
import logging

import pytest

from solvehash.runtime.settings import HashSettings
from solvehash.utils.logger import JsonFormatter, configure_logging, get_logger


@pytest.fixture
def fresh_logger_name(request):
    name = f"solvehash.test.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestGetLogger:
    """get_logger handler wiring."""

    def test_console_only_by_default(self, fresh_logger_name):
        logger = get_logger(fresh_logger_name)
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.WARNING

    def test_level_by_name(self, fresh_logger_name):
        logger = get_logger(fresh_logger_name, level="debug")
        assert logger.level == logging.DEBUG

    def test_file_handlers(self, fresh_logger_name, tmp_path):
        logger = get_logger(fresh_logger_name, level="INFO", log_dir=tmp_path / "logs")
        assert len(logger.handlers) == 3

        logger.info("hashed inputs")
        for handler in logger.handlers:
            handler.flush()

        assert "hashed inputs" in (tmp_path / "logs" / "solvehash.log").read_text()
        record = json.loads((tmp_path / "logs" / "solvehash.json").read_text().splitlines()[0])
        assert record["message"] == "hashed inputs"
        assert record["level"] == "INFO"

    def test_handlers_not_duplicated(self, fresh_logger_name):
        get_logger(fresh_logger_name)
        logger = get_logger(fresh_logger_name)
        assert len(logger.handlers) == 1


class TestJsonFormatter:
    """Structured log records."""

    def test_format(self):
        record = logging.LogRecord("solvehash", logging.INFO, __file__, 1, "hi %s", ("there",), None)
        data = json.loads(JsonFormatter().format(record))
        assert data["message"] == "hi there"
        assert data["logger"] == "solvehash"


class TestConfigureLogging:
    """Wiring from settings."""

    def test_uses_settings_level(self):
        logger = configure_logging(HashSettings(log_level="ERROR"))
        assert logger.name == "solvehash"
        assert logger.level == logging.ERROR

"""Tests for logging configuration."""

import json
import logging

import pytest

from metadata_gen.utils.logging_config import (
    JSONFormatter,
    LogFormat,
    LoggingManager,
    LogLevel,
)


class TestLogLevel:

    @pytest.mark.parametrize("name,level", [
        ("debug", LogLevel.DEBUG),
        ("WARNING", LogLevel.WARNING),
        (" Error ", LogLevel.ERROR),
    ])
    def test_from_name(self, name, level):
        assert LogLevel.from_name(name) is level

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            LogLevel.from_name("verbose")


class TestJSONFormatter:

    def test_format_includes_extra_data(self):
        record = logging.LogRecord(
            name="metadata_gen.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=10,
            msg="Parsed %s",
            args=("header",),
            exc_info=None,
        )
        record.extra_data = {"notation": "yaml"}

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "Parsed header"
        assert data["level"] == "INFO"
        assert data["logger"] == "metadata_gen.test"
        assert data["notation"] == "yaml"


class TestLoggingManager:

    def test_configures_root_logger(self, temp_directory):
        log_file = temp_directory / "logs" / "metadata.log"

        LoggingManager(LogLevel.DEBUG, LogFormat.JSON, log_file=log_file, enable_console=False)
        logging.getLogger("logging_manager_test").debug("written to file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 1
        line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["message"] == "written to file"

        for handler in root_logger.handlers:
            handler.close()

    def test_from_config(self):
        manager = LoggingManager.from_config({"level": "error", "format": "detailed"})

        assert manager.log_level is LogLevel.ERROR
        assert manager.log_format is LogFormat.DETAILED
        assert manager.log_file is None

    def test_repeated_setup_does_not_duplicate_handlers(self):
        LoggingManager()
        LoggingManager()
        assert len(logging.getLogger().handlers) == 1

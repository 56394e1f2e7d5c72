"""
SOLARWATCH Unit Tests - Logging Configuration

Unit tests for solarwatch/logging_config.py.
Tests setup_logging, get_logger and set_service_level.

Run:
    pytest tests/unit/test_logging_config.py -v
"""

import json
import logging
import tempfile
from pathlib import Path

import pytest

from solarwatch.logging_config import (
    JsonFormatter,
    get_logger,
    set_service_level,
    setup_logging,
)


def _close_file_handlers():
    for name in ("solarwatch", "SOLARWATCH"):
        root_logger = logging.getLogger(name)
        for h in list(root_logger.handlers):
            if hasattr(h, "baseFilename"):
                h.close()
                root_logger.removeHandler(h)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    _close_file_handlers()
    setup_logging()


# =============================================================================
# Test setup_logging Function
# =============================================================================

class TestSetupLogging:
    """Unit tests for setup_logging function."""

    def test_setup_logging_default(self):
        """Test setup_logging with default parameters."""
        setup_logging()

        assert logging.getLogger("solarwatch").level == logging.INFO
        assert get_logger("test_default").name == "solarwatch.test_default"

    def test_setup_logging_custom_level(self):
        """Test setup_logging with custom log level."""
        setup_logging(log_level="DEBUG")

        assert logging.getLogger("solarwatch").level == logging.DEBUG
        assert logging.getLogger("SOLARWATCH").level == logging.DEBUG

    def test_setup_logging_invalid_level_defaults_to_info(self):
        setup_logging(log_level="LOUD")

        assert logging.getLogger("solarwatch").level == logging.INFO

    def test_setup_logging_with_file(self):
        """Test setup_logging creates file handler when log_file specified."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_path = Path(tmpdir) / "test.log"
            setup_logging(log_file=log_path)

            root_logger = logging.getLogger("solarwatch")
            assert len(root_logger.handlers) == 2

            file_handlers = [h for h in root_logger.handlers if hasattr(h, "baseFilename")]
            assert len(file_handlers) == 1
            assert Path(file_handlers[0].baseFilename) == log_path

            _close_file_handlers()

    def test_setup_logging_creates_parent_directory(self):
        """Test that setup_logging creates parent directories for log file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_path = Path(tmpdir) / "subdir" / "nested" / "test.log"
            setup_logging(log_file=log_path)

            assert log_path.parent.exists()

            _close_file_handlers()

    def test_service_logger_writes_to_file(self):
        """Service loggers under SOLARWATCH.* reach the same handlers."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_path = Path(tmpdir) / "service.log"
            setup_logging(log_file=log_path)

            logging.getLogger("SOLARWATCH.Solar").warning("polar night")
            _close_file_handlers()

            assert "polar night" in log_path.read_text()

    def test_setup_logging_clears_existing_handlers(self):
        """Test that setup_logging clears existing handlers on re-initialization."""
        setup_logging(log_level="INFO")
        setup_logging(log_level="DEBUG")

        assert len(logging.getLogger("solarwatch").handlers) == 1
        assert len(logging.getLogger("SOLARWATCH").handlers) == 1

    def test_json_format(self):
        setup_logging(json_format=True)

        handler = logging.getLogger("solarwatch").handlers[0]
        assert isinstance(handler.formatter, JsonFormatter)


# =============================================================================
# Test JsonFormatter
# =============================================================================

class TestJsonFormatter:

    def test_format_is_json(self):
        record = logging.LogRecord(
            "solarwatch.test", logging.INFO, __file__, 1, "sunrise at %s", ("07:12:26",), None
        )
        payload = json.loads(JsonFormatter().format(record))
        assert payload["message"] == "sunrise at 07:12:26"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "solarwatch.test"


# =============================================================================
# Test get_logger Function
# =============================================================================

class TestGetLogger:
    """Unit tests for get_logger function."""

    def test_get_logger_returns_logger(self):
        assert isinstance(get_logger("test_module"), logging.Logger)

    def test_get_logger_adds_prefix(self):
        assert get_logger("main").name == "solarwatch.main"

    def test_get_logger_preserves_existing_prefix(self):
        assert get_logger("solarwatch.main").name == "solarwatch.main"


# =============================================================================
# Test set_service_level Function
# =============================================================================

class TestSetServiceLevel:
    """Unit tests for set_service_level function."""

    def test_set_service_level_debug(self):
        setup_logging()
        set_service_level("Solar", "DEBUG")

        assert logging.getLogger("SOLARWATCH.Solar").level == logging.DEBUG

    def test_set_service_level_case_insensitive(self):
        setup_logging()
        set_service_level("Timezone", "warning")

        assert logging.getLogger("SOLARWATCH.Timezone").level == logging.WARNING

    def test_set_service_level_invalid_defaults_to_info(self):
        setup_logging()
        set_service_level("Solar", "INVALID_LEVEL")

        assert logging.getLogger("SOLARWATCH.Solar").level == logging.INFO

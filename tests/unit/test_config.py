"""Tests for configuration and logging setup."""

import logging

import pytest

from stainframe.config import AlignmentConfig
from stainframe.utils.logging_config import setup_logging


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after the test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestAlignmentConfig:
    """Tests for AlignmentConfig."""

    def test_defaults(self):
        """Test default values."""
        config = AlignmentConfig()

        assert config.default_pixel_size_um == 1.0
        assert config.pixel_warning_threshold == 1e8
        assert config.bytes_per_pixel == 4.0
        assert config.plot_dpi == 150

    def test_from_dict(self):
        """Test creation from a dictionary."""
        config = AlignmentConfig.from_dict(
            {"bytes_per_pixel": 3.0, "plot_dpi": 72, "default_pixel_size_um": 0.5}
        )

        assert config.bytes_per_pixel == 3.0
        assert config.plot_dpi == 72
        assert config.default_pixel_size_um == 0.5
        assert config.pixel_warning_threshold == 1e8

    def test_from_dict_ignores_unknown_keys(self, caplog):
        """Test unknown keys are dropped with a warning."""
        with caplog.at_level(logging.WARNING):
            config = AlignmentConfig.from_dict({"colour": "red", "plot_dpi": 10})

        assert config.plot_dpi == 10
        assert "colour" in caplog.text


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_only(self, restore_root_logger):
        """Test a single console handler is installed."""
        setup_logging(log_level=logging.DEBUG)

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1

    def test_repeated_calls_do_not_duplicate(self, restore_root_logger):
        """Test calling twice keeps one console handler."""
        setup_logging()
        setup_logging()

        assert len(restore_root_logger.handlers) == 1

    def test_log_file(self, tmp_path, restore_root_logger):
        """Test messages are written to the log file."""
        log_file = tmp_path / "logs" / "stainframe.log"

        setup_logging(log_level=logging.INFO, log_file=log_file)
        logging.getLogger("stainframe.test").info("frame pair loaded")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert log_file.exists()
        assert "frame pair loaded" in log_file.read_text()

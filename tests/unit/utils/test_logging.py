"""Tests for logging utility."""

import logging
from io import StringIO


class TestLoggerConfiguration:
    """Test that logger configures correctly from settings."""

    def test_configure_logging_creates_logger(self):
        """configure_logging should return a configured logger."""
        from career_scraper.utils.logging import configure_logging

        logger = configure_logging()
        assert isinstance(logger, logging.Logger)
        assert logger.name == "career_scraper"

    def test_configure_logging_respects_level(self):
        """Logger should respect the configured log level."""
        from career_scraper.utils.logging import configure_logging

        logger = configure_logging(level="DEBUG")
        assert logger.level == logging.DEBUG

        logger = configure_logging(level="WARNING")
        assert logger.level == logging.WARNING
        assert all(h.level == logging.WARNING for h in logger.handlers)

    def test_configure_logging_default_level_is_info(self):
        """Default log level should be INFO."""
        from career_scraper.utils.logging import configure_logging

        logger = configure_logging()
        assert logger.level == logging.INFO

    def test_configure_logging_installs_one_handler(self):
        """Repeated configuration should not stack handlers."""
        from career_scraper.utils.logging import configure_logging

        configure_logging()
        logger = configure_logging()
        assert len(logger.handlers) == 1


class TestLogOutput:
    """Test that log output format is correct."""

    def test_module_logger_output_includes_level_and_name(self):
        """Messages from module loggers go through the application handler."""
        from career_scraper.utils.logging import configure_logging

        logger = configure_logging(level="INFO")

        buffer = StringIO()
        handler = logging.StreamHandler(buffer)
        handler.setFormatter(logger.handlers[0].formatter)
        logger.addHandler(handler)

        logging.getLogger("career_scraper.extraction.pipeline").info("Found 3 items")

        output = buffer.getvalue()
        assert "INFO" in output
        assert "career_scraper.extraction.pipeline" in output
        assert "Found 3 items" in output


class TestGetLogger:
    """Test the get_logger convenience function."""

    def test_get_logger_returns_child_logger(self):
        """get_logger should return a child of the main logger."""
        from career_scraper.utils.logging import configure_logging, get_logger

        configure_logging()

        logger = get_logger("browser")
        assert logger.name == "career_scraper.browser"

    def test_get_logger_inherits_level(self):
        """Child logger should inherit parent's level."""
        from career_scraper.utils.logging import configure_logging, get_logger

        configure_logging(level="DEBUG")

        logger = get_logger("test_module")
        assert logger.getEffectiveLevel() == logging.DEBUG


def test_reset_logging_restores_propagation():
    from career_scraper.utils.logging import configure_logging, reset_logging

    logger = configure_logging()
    reset_logging()

    assert logger.handlers == []
    assert logger.propagate is True

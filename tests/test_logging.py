"""Tests for logging configuration."""

import logging

from cmd_inspector.inspector import RegistryInspector
from cmd_inspector.logging import disable_verbose, enable_verbose

_logger = logging.getLogger("cmd_inspector")


def _stream_handlers():
    return [h for h in _logger.handlers if not isinstance(h, logging.NullHandler)]


class TestLogging:
    """Tests for logging functions."""

    def test_silent_by_default(self):
        """Only the NullHandler is attached until verbose is enabled."""
        assert _stream_handlers() == []
        assert any(isinstance(h, logging.NullHandler) for h in _logger.handlers)

    def test_enable_verbose(self):
        """Enable verbose logging."""
        enable_verbose("DEBUG")
        assert _logger.level == logging.DEBUG
        assert len(_stream_handlers()) == 1

    def test_enable_twice_keeps_one_handler(self):
        enable_verbose("INFO")
        enable_verbose("DEBUG")
        assert len(_stream_handlers()) == 1

    def test_disable_verbose(self):
        """Disable verbose logging."""
        enable_verbose("INFO")
        disable_verbose()
        assert _stream_handlers() == []
        assert _logger.level == logging.WARNING

    def test_enable_with_format(self):
        """Enable with custom format."""
        enable_verbose("INFO", format="%(message)s")
        assert _stream_handlers()[0].formatter._fmt == "%(message)s"

    def test_conflicts_logged(self, conflicting_app, caplog):
        """Failing commands are logged as warnings during a scan."""
        with caplog.at_level(logging.WARNING, logger="cmd_inspector"):
            RegistryInspector(conflicting_app).find_conflicts()

        assert "Error checking command 'plesk-ext-laravel:noisy'" in caplog.text

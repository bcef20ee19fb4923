"""
Logging configuration for cmd-inspector.

The package logger stays silent unless the CLI (or a caller) turns
verbose output on.
"""

import logging

_logger = logging.getLogger("cmd_inspector")
_logger.addHandler(logging.NullHandler())  # Default: no output


def enable_verbose(level: str = "INFO", format: str | None = None) -> None:
    """Enable verbose logging on stderr.

    Args:
        level: Logging level - "DEBUG", "INFO", "WARNING", "ERROR"
        format: Optional custom format string

    Example:
        enable_verbose("DEBUG")
        RegistryInspector(app).find_conflicts()  # logs each conflict
        disable_verbose()
    """
    _logger.setLevel(getattr(logging, level.upper()))

    for handler in _logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            _logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(getattr(logging, level.upper()))

    if format is None:
        format = "[%(levelname)s] %(message)s"

    handler.setFormatter(logging.Formatter(format))
    _logger.addHandler(handler)


def disable_verbose() -> None:
    """Disable verbose logging."""
    _logger.setLevel(logging.WARNING)
    for handler in _logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            _logger.removeHandler(handler)

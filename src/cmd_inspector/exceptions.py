"""
Exception hierarchy for cmd-inspector.

Every error carries a message, a context dictionary and a list of
suggestions, and formats all three when converted to a string.

Example::

    from cmd_inspector.exceptions import DefinitionConflictError

    raise DefinitionConflictError(
        "--quiet",
        command="app:sync",
        suggestions=["Drop the command's own --quiet and use the global flag"],
    )
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class InspectorError(Exception):
    """
    Base exception for all cmd-inspector errors.

    Attributes:
        context: Dictionary of contextual information (command, option, ...)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()

    def __rich_console__(self, console, options):
        from rich.text import Text

        yield Text(f"Error: {self.message}", style="bold red")
        for key, value in self.context.items():
            yield Text(f"  {key}: {value}", style="dim")
        for suggestion in self.suggestions:
            yield Text(f"  - {suggestion}", style="yellow")


class DefinitionConflictError(InspectorError):
    """
    Two option declarations collide on one parser.

    Raised when argparse refuses to register an option string that is
    already taken, typically a command declaring its own ``-q/--quiet``
    while also inheriting the global one. The original
    ``argparse.ArgumentError`` is chained as ``__cause__``.

    Example::

        raise DefinitionConflictError(
            "-q/--quiet",
            command="app:sync",
            detail="conflicting option strings: -q, --quiet",
        )
    """

    def __init__(
        self,
        option_string: str,
        command: Optional[str] = None,
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.option_string = option_string
        self.command = command
        self.detail = detail

        ctx = context or {}
        if command and "command" not in ctx:
            ctx["command"] = command
        if detail and "detail" not in ctx:
            ctx["detail"] = detail

        message = f"An option named '{option_string}' already exists."
        super().__init__(message, ctx, suggestions)


class OptionLookupError(InspectorError):
    """
    A command's option definitions could not be read.

    Example::

        raise OptionLookupError(
            "Cannot build parser for command",
            context={"command": "app:broken", "reason": "add_arguments() failed"},
        )
    """

    pass


class ApplicationLoadError(InspectorError):
    """
    The application named by ``--app`` could not be loaded.

    Example::

        raise ApplicationLoadError(
            "Module not found",
            context={"target": "mypkg.cli:app"},
            suggestions=["Check that the package is installed"],
        )
    """

    pass


class ConfigurationError(InspectorError):
    """
    Configuration file is invalid or unreadable.

    Example::

        raise ConfigurationError(
            "Invalid TOML",
            context={"file": ".cmd-inspector.toml"},
        )
    """

    pass


__all__ = [
    "InspectorError",
    "DefinitionConflictError",
    "OptionLookupError",
    "ApplicationLoadError",
    "ConfigurationError",
]

"""Shared utilities for CLI commands."""

from __future__ import annotations

import sys
import traceback
from typing import TYPE_CHECKING

from cmd_inspector.exceptions import InspectorError

if TYPE_CHECKING:
    from rich.console import Console

__all__ = ["format_error", "print_error", "get_console", "get_error_console"]

# Module-level console for error output, created lazily
_error_console: Console | None = None


def get_console(quiet: bool = False) -> Console:
    """Create a Rich console for report output on stdout.

    Lines are never wrapped so report entries stay on one line when
    output is piped.
    """
    from rich.console import Console

    return Console(soft_wrap=True, highlight=False, emoji=False, quiet=quiet)


def get_error_console() -> Console:
    """Get or create the Rich console for error output.

    Returns a console configured for stderr with appropriate settings.
    The console is created lazily and cached for reuse.
    """
    global _error_console
    if _error_console is None:
        from rich.console import Console

        _error_console = Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)
    return _error_console


def print_error(
    e: Exception,
    verbose: bool = False,
    use_rich: bool | None = None,
) -> None:
    """
    Print an exception with Rich formatting when available.

    Uses Rich console for error output on TTY terminals,
    falls back to plain text for non-TTY (pipes, test capture, etc.).

    Args:
        e: The exception to print
        verbose: If True, include full stack trace
        use_rich: Override automatic TTY detection (None = auto-detect)
    """
    console = get_error_console()

    if use_rich is None:
        use_rich = console.is_terminal

    if verbose:
        # Always use plain text for stack traces
        print("".join(traceback.format_exception(e)), file=sys.stderr)
        return

    if use_rich and isinstance(e, InspectorError):
        console.print(e)
    else:
        print(format_error(e, verbose=False), file=sys.stderr)


def format_error(e: Exception, verbose: bool = False) -> str:
    """
    Format an exception for user-friendly display (plain text).

    Args:
        e: The exception to format
        verbose: If True, include full stack trace

    Returns:
        Formatted error message string
    """
    if verbose:
        return "".join(traceback.format_exception(e))

    if isinstance(e, InspectorError):
        return f"Error: {e}"

    return f"Error: {type(e).__name__}: {e}"

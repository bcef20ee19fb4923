"""Command protocol for cmd-inspector CLI.

Defines the interface every CLI command implements. Commands own their
argument parser configuration and execution logic.

Usage:
    from cmd_inspector.cli.command_protocol import Command

    class MyCommand:
        name = "app:sync"
        help = "Synchronise things"

        @staticmethod
        def add_arguments(parser: argparse.ArgumentParser) -> None:
            parser.add_argument("--dry-run", action="store_true", help="Show changes only")

        @staticmethod
        def run(args: argparse.Namespace) -> int:
            return 0
"""

import argparse
from typing import Protocol, runtime_checkable


@runtime_checkable
class Command(Protocol):
    """Protocol for CLI commands.

    Attributes:
        name: The command name (e.g., "debug", "app:sync").
        help: Brief help text shown in the top-level --help output.

    Methods:
        add_arguments: Register arguments on the provided parser. The parser
            already carries the application's global options.
        run: Execute the command with the parsed argument namespace.
    """

    name: str
    help: str

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        """Add command-specific arguments to the parser."""
        ...

    @staticmethod
    def run(args: argparse.Namespace) -> int:
        """Execute the command.

        Returns:
            Exit code (0 for success, non-zero for errors).
        """
        ...


def is_command_class(obj: object) -> bool:
    """True if ``obj`` is a class providing the Command protocol."""
    return (
        isinstance(obj, type)
        and hasattr(obj, "name")
        and hasattr(obj, "help")
        and hasattr(obj, "add_arguments")
        and hasattr(obj, "run")
    )

"""Command registry for cmd-inspector CLI.

Provides auto-discovery of the bundled commands and their registration
on argparse subparsers.

Usage:
    from cmd_inspector.cli.registry import discover_commands, register_commands

    # Discover all command modules
    commands = discover_commands()

    # Register them on an argparse subparsers group
    register_commands(subparsers, commands, parents=[global_parser])
"""

from __future__ import annotations

import argparse
import importlib
import logging
import pkgutil
from collections.abc import Sequence
from typing import TYPE_CHECKING

from cmd_inspector.cli.command_protocol import is_command_class
from cmd_inspector.exceptions import DefinitionConflictError

if TYPE_CHECKING:
    from cmd_inspector.cli.command_protocol import Command

logger = logging.getLogger(__name__)

# Registry of command classes.
# Populated by discover_commands() at startup.
_registry: dict[str, type["Command"]] = {}


def discover_commands() -> dict[str, type["Command"]]:
    """Discover command classes in the commands subpackage.

    Scans cmd_inspector.cli.commands for modules that export a class
    implementing the Command protocol (has name, help, add_arguments, run).
    Classes without a name (abstract bases) are skipped.

    Returns:
        Dict mapping command names to command classes, sorted by name.
    """
    import cmd_inspector.cli.commands as pkg

    commands: dict[str, type[Command]] = {}

    for _, modname, _ in pkgutil.iter_modules(pkg.__path__):
        if modname.startswith("_"):
            continue
        try:
            module = importlib.import_module(f"cmd_inspector.cli.commands.{modname}")
        except ImportError as e:
            logger.warning("Skipping command module %s: %s", modname, e)
            continue

        for attr_name in dir(module):
            if attr_name.startswith("_"):
                continue
            obj = getattr(module, attr_name)
            # Only classes defined in this module, not imported bases
            if not isinstance(obj, type) or obj.__module__ != module.__name__:
                continue
            if is_command_class(obj) and obj.name:
                commands[obj.name] = obj

    global _registry
    _registry = dict(sorted(commands.items()))
    return _registry


def get_registry() -> dict[str, type["Command"]]:
    """Return the current command registry.

    Returns:
        Dict mapping command names to command classes.
    """
    return _registry


def conflict_from_argument_error(
    error: argparse.ArgumentError, command: str | None = None
) -> DefinitionConflictError:
    """Describe an argparse registration failure as a definition conflict."""
    parts = (error.argument_name or "").split("/")
    long_names = [p for p in parts if p.startswith("--")]
    option_string = long_names[0] if long_names else (parts[0] or "unknown")
    return DefinitionConflictError(
        option_string,
        command=command,
        detail=error.message,
        suggestions=[
            f"Remove the command's own {option_string} and rely on the global option",
            "Or build the command parser without inheriting the global options",
        ],
    )


def register_commands(
    subparsers: argparse._SubParsersAction,
    commands: dict[str, type["Command"]],
    *,
    parents: Sequence[argparse.ArgumentParser] = (),
    skip_existing: bool = True,
) -> None:
    """Register commands on an argparse subparsers group.

    For each command, creates a subparser and calls the command's
    add_arguments() method to populate it. Sets a ``_command_class``
    default on the subparser so dispatch can find the right run() method.

    Args:
        subparsers: The _SubParsersAction from parser.add_subparsers().
        commands: Dict of command name -> command class.
        parents: Parsers whose options every command inherits (shared
            Action objects, as argparse does for ``parents=``).
        skip_existing: If True, skip commands whose names already exist
            as subparsers.

    Raises:
        DefinitionConflictError: If a command declares an option string
            that is already taken on its parser.
    """
    existing_names: set[str] = set()
    if skip_existing and hasattr(subparsers, "_name_parser_map"):
        existing_names = set(subparsers._name_parser_map.keys())

    for name, cmd_class in commands.items():
        if name in existing_names:
            continue

        sub = subparsers.add_parser(name, help=cmd_class.help, parents=list(parents))
        try:
            cmd_class.add_arguments(sub)
        except argparse.ArgumentError as e:
            raise conflict_from_argument_error(e, command=name) from e
        sub.set_defaults(_command_class=cmd_class)

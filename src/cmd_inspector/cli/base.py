"""
Base classes for cmd-inspector commands.

``Command`` is the root of every command class. Subclasses are recorded
in the command lineage table when they are defined, so the debug command
can show where a class sits without runtime reflection.

``BaseCommand`` declares options as data and attaches ``default_options``
only when the parser does not already provide them (for example, when the
application's global ``-q/--quiet`` is inherited).

Example::

    class SyncCommand(BaseCommand):
        name = "app:sync"
        help = "Synchronise records"
        options = (OptionSpec("dry-run", description="Show changes only"),)

        @classmethod
        def run(cls, args):
            return 0
"""

from __future__ import annotations

import argparse

from cmd_inspector.lineage import COMMAND_LINEAGE, ROOT_COMMAND_TYPE
from cmd_inspector.options import OptionSpec, merge_options, reserved_option_strings

__all__ = ["Command", "BaseCommand", "QUIET_OPTION"]

QUIET_OPTION = OptionSpec("quiet", "q", "Do not output any message")


class Command:
    """Root command class.

    Attributes:
        name: Command name used on the command line
        help: One-line description
        type_name: Tag recorded in the lineage table (defaults to the
            class name)
    """

    name: str = ""
    help: str = ""
    type_name: str = ROOT_COMMAND_TYPE

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if "type_name" not in cls.__dict__:
            cls.type_name = cls.__name__
        parent = None
        for base in cls.__bases__:
            if issubclass(base, Command):
                parent = base.type_name
                break
        COMMAND_LINEAGE.declare(cls.type_name, parent)

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Add command-specific arguments. Default: none."""

    @classmethod
    def run(cls, args: argparse.Namespace) -> int:
        raise NotImplementedError(f"{cls.type_name} does not implement run()")


class BaseCommand(Command):
    """Command with declarative options and mergeable defaults."""

    options: tuple[OptionSpec, ...] = ()
    default_options: tuple[OptionSpec, ...] = (QUIET_OPTION,)

    @classmethod
    def declare_options(cls) -> list[OptionSpec]:
        """Options this command declares itself."""
        return list(cls.options)

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        specs = merge_options(
            cls.declare_options(),
            cls.default_options,
            reserved=reserved_option_strings(parser),
        )
        for spec in specs:
            spec.add_to(parser)

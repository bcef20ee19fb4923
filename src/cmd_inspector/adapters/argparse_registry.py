"""
Registry adapter for plain argparse applications.

Wraps an ``argparse.ArgumentParser`` that uses ``add_subparsers()`` so
the inspector can read it. Global options are the root parser's
optional arguments; each subparser is one command.

Subparsers created with ``parents=[...]`` share the parent's Action
objects, so an inherited global option is the same declaration on the
root parser and on every command.

Example::

    parser = argparse.ArgumentParser()
    parser.add_argument("-q", "--quiet", action="store_true")
    subparsers = parser.add_subparsers(dest="command")
    ...
    inspector = RegistryInspector(ParserRegistry(parser))
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass

from cmd_inspector.options import Option, options_from_parser

__all__ = ["ParserCommand", "ParserRegistry"]


@dataclass
class ParserCommand:
    """A subparser viewed as a command."""

    name: str
    parser: argparse.ArgumentParser

    def get_options(self) -> list[Option]:
        return options_from_parser(self.parser)

    def get_type_name(self) -> str:
        # register_commands() stores the command class as a parser default
        command_class = self.parser.get_default("_command_class")
        if command_class is not None:
            return getattr(command_class, "type_name", command_class.__name__)
        return type(self.parser).__name__


class ParserRegistry:
    """Registry view over an argparse parser and its subparsers.

    Args:
        parser: Root parser of the application
        global_parser: Parser holding the global options, when they are
            kept on a separate parent parser. Defaults to ``parser``.
    """

    def __init__(
        self,
        parser: argparse.ArgumentParser,
        global_parser: argparse.ArgumentParser | None = None,
    ):
        self.parser = parser
        self.global_parser = global_parser or parser

    def _subparsers_actions(self) -> list[argparse._SubParsersAction]:
        return [a for a in self.parser._actions if isinstance(a, argparse._SubParsersAction)]

    def list_all(self) -> dict[str, ParserCommand]:
        commands: dict[str, ParserCommand] = {}
        for action in self._subparsers_actions():
            for name, subparser in action._name_parser_map.items():
                # Aliases map to the same parser; keep the first name
                if any(c.parser is subparser for c in commands.values()):
                    continue
                commands[name] = ParserCommand(name=name, parser=subparser)
        return commands

    def get_global_options(self) -> list[Option]:
        return options_from_parser(self.global_parser)

    def get_type_name(self) -> str:
        return type(self.parser).__name__

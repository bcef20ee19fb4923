"""
Console application: global options plus a set of commands.

Global options live on one parent parser. Each command parser is built
with ``parents=[definition]`` so every command shares the application's
Action objects for ``--version``, ``--verbose`` and ``--quiet``.

Command parsers are assembled lazily: running one command only builds
that command's parser, so a broken definition elsewhere does not prevent
the debug command from running and reporting it. ``build_parser()``
assembles everything at once and surfaces the first conflict.
"""

from __future__ import annotations

import argparse
import difflib
import logging
import sys
from dataclasses import dataclass

from cmd_inspector.cli.command_protocol import is_command_class
from cmd_inspector.cli.registry import conflict_from_argument_error, register_commands
from cmd_inspector.config import Config
from cmd_inspector.exceptions import InspectorError, OptionLookupError
from cmd_inspector.options import Option, options_from_parser

logger = logging.getLogger(__name__)

__all__ = ["ConsoleApplication", "ApplicationCommand"]


@dataclass
class ApplicationCommand:
    """Registry view of one application command."""

    name: str
    application: ConsoleApplication
    command_class: type

    def get_options(self) -> list[Option]:
        try:
            parser = self.application.command_parser(self.name)
        except InspectorError:
            raise
        except Exception as e:
            raise OptionLookupError(
                f"Cannot build parser: {e}",
                context={"command": self.name, "error": type(e).__name__},
            ) from e
        return options_from_parser(parser)

    def get_type_name(self) -> str:
        return getattr(self.command_class, "type_name", self.command_class.__name__)


class ConsoleApplication:
    """An argparse-based application with named commands.

    Args:
        prog: Program name shown in usage and help
        version: Version string for --version (omitted when empty)
        description: Description for the top-level help
        config: Loaded configuration (default: built-in defaults)
    """

    def __init__(
        self,
        prog: str,
        version: str = "",
        description: str | None = None,
        config: Config | None = None,
    ):
        self.prog = prog
        self.version = version
        self.description = description
        self.config = config or Config()
        self._commands: dict[str, type] = {}
        self.definition = self._create_definition()

    def _create_definition(self) -> argparse.ArgumentParser:
        """Parent parser holding the global options."""
        definition = argparse.ArgumentParser(add_help=False)
        if self.version:
            definition.add_argument(
                "-V",
                "--version",
                action="version",
                version=f"{self.prog} {self.version}",
                help="Show version and exit",
            )
        definition.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Show debug logging and full stack traces on errors",
            dest="global_verbose",
        )
        definition.add_argument(
            "-q",
            "--quiet",
            action="store_true",
            help="Suppress report output (for scripting)",
            dest="global_quiet",
        )
        return definition

    def get_type_name(self) -> str:
        return type(self).__name__

    # Registry

    def add(self, command_class: type) -> type:
        """Register a command class. A later class with the same name wins."""
        if not is_command_class(command_class):
            raise TypeError(f"{command_class!r} does not implement the Command protocol")
        if command_class.name in self._commands:
            logger.debug("Replacing command %s", command_class.name)
        self._commands[command_class.name] = command_class
        return command_class

    def add_commands(self, commands) -> None:
        for command_class in commands:
            self.add(command_class)

    def find(self, name: str) -> type:
        """Look up a command class by name."""
        try:
            return self._commands[name]
        except KeyError:
            close = difflib.get_close_matches(name, list(self._commands), n=3)
            raise InspectorError(
                f"Command '{name}' is not defined",
                context={"available": ", ".join(self._commands) or "none"},
                suggestions=[f"Did you mean '{match}'?" for match in close],
            ) from None

    def all(self) -> dict[str, type]:
        """Command classes keyed by name, in registration order."""
        return dict(self._commands)

    def list_all(self) -> dict[str, ApplicationCommand]:
        return {
            name: ApplicationCommand(name=name, application=self, command_class=cls)
            for name, cls in self._commands.items()
        }

    def get_global_options(self) -> list[Option]:
        return options_from_parser(self.definition)

    # Parser assembly

    def build_command_parser(
        self, command_class: type, name: str | None = None
    ) -> argparse.ArgumentParser:
        """Build a parser for one command class on top of the global options.

        Raises:
            DefinitionConflictError: If the command declares an option
                string the parser already has.
        """
        name = name or command_class.name
        parser = argparse.ArgumentParser(
            prog=f"{self.prog} {name}",
            description=command_class.help,
            parents=[self.definition],
        )
        try:
            command_class.add_arguments(parser)
        except argparse.ArgumentError as e:
            raise conflict_from_argument_error(e, command=name) from e
        parser.set_defaults(_command_class=command_class, _application=self, command=name)
        return parser

    def command_parser(self, name: str) -> argparse.ArgumentParser:
        return self.build_command_parser(self.find(name), name)

    def build_parser(self) -> argparse.ArgumentParser:
        """Assemble every command on one parser.

        Raises:
            DefinitionConflictError: For the first command whose options
                collide with the global ones.
        """
        parser = argparse.ArgumentParser(
            prog=self.prog,
            description=self.description,
            parents=[self.definition],
        )
        subparsers = parser.add_subparsers(dest="command", metavar="<command>")
        register_commands(subparsers, self._commands, parents=[self.definition])
        parser.set_defaults(_application=self)
        return parser

    def _root_parser(self) -> argparse.ArgumentParser:
        return argparse.ArgumentParser(
            prog=self.prog,
            usage="%(prog)s [options] <command> [args]",
            description=self.description,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._commands_epilog(),
            parents=[self.definition],
        )

    def _commands_epilog(self) -> str:
        if not self._commands:
            return ""
        width = max(len(name) for name in self._commands)
        lines = ["Available commands:"]
        for name, cls in self._commands.items():
            lines.append(f"  {name.ljust(width)}  {cls.help}")
        return "\n".join(lines)

    # Dispatch

    def run(self, argv: list[str] | None = None) -> int:
        """Parse ``argv`` and run the selected command.

        Options before the command name are global; everything after it
        goes to the command's own parser, which also accepts the global
        options.
        """
        from cmd_inspector.cli.utils import print_error
        from cmd_inspector.logging import enable_verbose

        argv = list(sys.argv[1:] if argv is None else argv)
        global_argv, name, command_argv = _split_argv(argv)

        root = self._root_parser()
        root_args = root.parse_args(global_argv)
        verbose = root_args.global_verbose or self.config.defaults.verbose

        if name is None:
            root.print_help()
            return 0

        try:
            parser = self.command_parser(name)
        except InspectorError as e:
            print_error(e, verbose=verbose)
            return 1

        args = parser.parse_args(command_argv)
        for action in self.definition._actions:
            if getattr(root_args, action.dest, None):
                setattr(args, action.dest, True)
        if self.config.defaults.verbose:
            args.global_verbose = True
        if self.config.defaults.quiet:
            args.global_quiet = True

        if args.global_verbose:
            enable_verbose("DEBUG")

        try:
            return args._command_class.run(args) or 0
        except InspectorError as e:
            print_error(e, verbose=args.global_verbose)
            return 1


def _split_argv(argv: list[str]) -> tuple[list[str], str | None, list[str]]:
    """Split argv into (global options, command name, command arguments)."""
    for index, token in enumerate(argv):
        if token == "--":
            rest = argv[index + 1 :]
            if rest:
                return argv[:index], rest[0], rest[1:]
            return argv[:index], None, []
        if not token.startswith("-"):
            return argv[:index], token, argv[index + 1 :]
    return argv, None, []

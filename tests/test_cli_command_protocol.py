"""Tests for the CLI command protocol and registry.

Tests cover:
1. Command protocol validation (structural typing)
2. Auto-discovery of the bundled commands
3. Registration on argparse subparsers, including option conflicts
"""

import argparse

import pytest

from cmd_inspector.cli.base import BaseCommand, Command
from cmd_inspector.exceptions import DefinitionConflictError
from cmd_inspector.lineage import COMMAND_LINEAGE


class TestCommandProtocol:
    """Tests for the Command protocol definition."""

    def test_valid_command_class_satisfies_protocol(self):
        """A class with the right attributes satisfies the protocol."""
        from cmd_inspector.cli.command_protocol import Command as CommandProtocol

        class GoodCommand:
            name = "test"
            help = "A test command"

            @staticmethod
            def add_arguments(parser: argparse.ArgumentParser) -> None:
                pass

            @staticmethod
            def run(args: argparse.Namespace) -> int:
                return 0

        assert isinstance(GoodCommand(), CommandProtocol)

    def test_missing_method_fails_protocol(self):
        """A class missing required methods does not satisfy the protocol."""
        from cmd_inspector.cli.command_protocol import Command as CommandProtocol, is_command_class

        class BadCommand:
            name = "test"
            help = "A test command"

        assert not isinstance(BadCommand(), CommandProtocol)
        assert not is_command_class(BadCommand)

    def test_is_command_class_rejects_instances(self):
        """is_command_class only accepts classes."""
        from cmd_inspector.cli.command_protocol import is_command_class

        assert is_command_class(BaseCommand)
        assert not is_command_class(BaseCommand())


class TestCommandBase:
    """Tests for the Command base classes."""

    def test_subclass_records_lineage(self):
        """Defining a subclass records its parent type."""

        class ReportCommand(BaseCommand):
            name = "app:report"
            help = "Report"

        assert ReportCommand.type_name == "ReportCommand"
        assert COMMAND_LINEAGE.parent_of("ReportCommand") == "BaseCommand"
        assert COMMAND_LINEAGE.ancestry("ReportCommand") == [
            "ReportCommand",
            "BaseCommand",
            "Command",
        ]

    def test_explicit_type_name(self):
        """A class can choose its own lineage tag."""

        class Tagged(Command):
            type_name = "TaggedTag"
            name = "app:tagged"

        assert COMMAND_LINEAGE.parent_of("TaggedTag") == "Command"

    def test_run_not_implemented(self):
        """The root class has no behaviour of its own."""
        with pytest.raises(NotImplementedError):
            Command.run(argparse.Namespace())


class TestRegistry:
    """Tests for the command registry and auto-discovery."""

    def test_discover_finds_bundled_commands(self):
        """Auto-discovery finds debug and config."""
        from cmd_inspector.cli.registry import discover_commands

        commands = discover_commands()
        assert list(commands) == ["config", "debug"]

    def test_discover_skips_private_classes(self):
        """Helper classes with leading underscores are not commands."""
        from cmd_inspector.cli.registry import discover_commands

        assert "test:minimal" not in discover_commands()

    def test_get_registry_returns_discovered(self):
        """get_registry returns the same dict after discover_commands."""
        from cmd_inspector.cli.registry import discover_commands, get_registry

        commands = discover_commands()
        assert get_registry() is commands

    def test_register_commands_adds_subparsers(self):
        """register_commands adds subparsers for discovered commands."""
        from cmd_inspector.cli.registry import discover_commands, register_commands

        parser = argparse.ArgumentParser()
        subparsers = parser.add_subparsers(dest="command")
        register_commands(subparsers, discover_commands())

        args = parser.parse_args(["config", "--show"])
        assert args.command == "config"
        assert args.show is True
        assert args._command_class.name == "config"

    def test_register_commands_skip_existing(self):
        """register_commands keeps subparsers that already exist."""
        from cmd_inspector.cli.registry import discover_commands, register_commands

        parser = argparse.ArgumentParser()
        subparsers = parser.add_subparsers(dest="command")
        subparsers.add_parser("config")

        register_commands(subparsers, discover_commands(), skip_existing=True)

        args = parser.parse_args(["config"])
        assert args.command == "config"
        assert not hasattr(args, "_command_class")

    def test_register_commands_with_parents(self, global_parser):
        """Commands inherit the parent's options without redeclaring them."""
        from cmd_inspector.cli.registry import discover_commands, register_commands

        parser = argparse.ArgumentParser(parents=[global_parser])
        subparsers = parser.add_subparsers(dest="command")
        register_commands(subparsers, discover_commands(), parents=[global_parser])

        args = parser.parse_args(["debug", "-q", "--trace-quiet"])
        assert args.quiet is True
        assert args.trace_quiet is True

    def test_register_commands_conflict(self, global_parser):
        """A command re-declaring an inherited option raises a conflict."""
        from cmd_inspector.cli.registry import register_commands

        class LoudCommand(Command):
            name = "app:loud"
            help = "Declares its own quiet"

            @classmethod
            def add_arguments(cls, parser):
                parser.add_argument("-q", "--quiet", action="store_true")

        parser = argparse.ArgumentParser()
        subparsers = parser.add_subparsers(dest="command")

        with pytest.raises(DefinitionConflictError) as exc_info:
            register_commands(subparsers, {"app:loud": LoudCommand}, parents=[global_parser])

        error = exc_info.value
        assert error.option_string == "--quiet"
        assert error.command == "app:loud"
        assert "conflicting option string" in error.detail
        assert error.suggestions


class TestConflictFromArgumentError:
    """Tests for wrapping argparse errors."""

    def test_prefers_long_option(self):
        from cmd_inspector.cli.registry import conflict_from_argument_error

        parser = argparse.ArgumentParser(add_help=False)
        parser.add_argument("-q", "--quiet", action="store_true")
        with pytest.raises(argparse.ArgumentError) as exc_info:
            parser.add_argument("-q", "--quiet", action="store_true")

        error = conflict_from_argument_error(exc_info.value, command="x")
        assert error.option_string == "--quiet"
        assert error.message == "An option named '--quiet' already exists."

    def test_short_only(self):
        from cmd_inspector.cli.registry import conflict_from_argument_error

        parser = argparse.ArgumentParser(add_help=False)
        parser.add_argument("-x", action="store_true")
        with pytest.raises(argparse.ArgumentError) as exc_info:
            parser.add_argument("-x", action="store_true")

        assert conflict_from_argument_error(exc_info.value).option_string == "-x"

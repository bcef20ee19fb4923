"""Pytest fixtures for cmd-inspector tests."""

import argparse

import pytest

from cmd_inspector.cli.application import ConsoleApplication
from cmd_inspector.cli.base import BaseCommand, Command
from cmd_inspector.cli.commands.config import ConfigCommand
from cmd_inspector.cli.commands.debug import DebugCommand
from cmd_inspector.logging import disable_verbose
from cmd_inspector.options import OptionSpec


class SyncCommand(BaseCommand):
    """Well-behaved command: inherits the global quiet flag."""

    name = "plesk-ext-laravel:sync"
    help = "Synchronise records"
    options = (OptionSpec("dry-run", description="Show changes without applying"),)

    @classmethod
    def run(cls, args):
        return 0


class NoisyCommand(Command):
    """Declares its own -q/--quiet on top of the inherited one."""

    name = "plesk-ext-laravel:noisy"
    help = "Command with its own quiet flag"

    @classmethod
    def add_arguments(cls, parser):
        parser.add_argument("-q", "--quiet", action="store_true", help="Only print errors")

    @classmethod
    def run(cls, args):
        return 0


class OtherCommand(Command):
    """Command outside the namespace."""

    name = "other:cmd"
    help = "Unrelated command"

    @classmethod
    def run(cls, args):
        return 0


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep real user/project config files out of every test."""
    monkeypatch.setattr(
        "cmd_inspector.config.USER_CONFIG_PATH", tmp_path / "user" / "config.toml"
    )
    work = tmp_path / "work"
    work.mkdir()
    (work / ".git").mkdir()
    monkeypatch.chdir(work)
    return work


@pytest.fixture(autouse=True)
def quiet_logging():
    """Drop handlers added by --verbose runs."""
    yield
    disable_verbose()


@pytest.fixture
def app():
    """Application with the debug command and two well-behaved commands."""
    application = ConsoleApplication(prog="test-app", version="1.0")
    application.add_commands([DebugCommand, ConfigCommand, SyncCommand, OtherCommand])
    return application


@pytest.fixture
def conflicting_app(app):
    """Application where one command re-declares -q/--quiet."""
    app.add(NoisyCommand)
    return app


@pytest.fixture
def global_parser():
    """Parent parser with a global -q/--quiet."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-q", "--quiet", action="store_true", help="Do not output any message")
    return common


@pytest.fixture
def plain_parser(global_parser):
    """Plain argparse application: one subcommand declares its own --quiet."""
    parser = argparse.ArgumentParser(prog="plain", parents=[global_parser])
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("plesk-ext-laravel:debug", parents=[global_parser])
    sync = subparsers.add_parser("plesk-ext-laravel:sync")
    sync.add_argument("-q", "--quiet", action="store_true", help="Do not output any message")
    subparsers.add_parser("other:cmd", parents=[global_parser])
    return parser

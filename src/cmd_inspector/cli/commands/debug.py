"""
Debug command: diagnose duplicate global option declarations.

Usage:
    cmd-inspector debug                      Inspect registered commands
    cmd-inspector debug --namespace app:     Only list commands under app:
    cmd-inspector debug --trace-quiet        Trace where --quiet is declared
    cmd-inspector debug --app pkg.cli:app    Inspect another application

The report is informational: detected conflicts and recovered errors
still exit with status 0.
"""

from __future__ import annotations

import argparse
import traceback

from rich.markup import escape

from cmd_inspector.cli.base import BaseCommand, Command
from cmd_inspector.cli.registry import conflict_from_argument_error
from cmd_inspector.cli.utils import get_console, get_error_console
from cmd_inspector.exceptions import ApplicationLoadError, DefinitionConflictError
from cmd_inspector.inspector import InspectionWarning, RegistryInspector
from cmd_inspector.options import OptionSpec, options_from_parser
from cmd_inspector.trace import exception_origin, extract_frames

CONFLICT_CAUSES = [
    "A command is trying to register an option that already exists globally",
    "Two commands are trying to register the same option",
    "A command class is modifying its parser definition incorrectly",
]


class _MinimalCommand(Command):
    """Command with no options of its own."""

    name = "test:minimal"
    help = "Minimal test command"

    @classmethod
    def run(cls, args: argparse.Namespace) -> int:
        return 0


class DebugCommand(BaseCommand):
    """Debug command registration issues."""

    name = "debug"
    help = "Debug command registration issues"
    options = (
        OptionSpec("trace-quiet", description="Trace quiet option registrations"),
        OptionSpec(
            "namespace",
            description="Only list commands whose name starts with this prefix",
            action="store",
            metavar="PREFIX",
        ),
        OptionSpec(
            "option",
            description="Option name to check (default: quiet)",
            action="store",
            metavar="NAME",
        ),
        OptionSpec(
            "app",
            description="Inspect another application instead (MODULE:ATTR)",
            action="store",
            metavar="TARGET",
        ),
    )

    @classmethod
    def run(cls, args: argparse.Namespace) -> int:
        application = args._application
        settings = application.config.inspect
        console = get_console(quiet=getattr(args, "global_quiet", False))

        console.print("[green]=== Debugging Command Registration ===[/green]")

        try:
            target = _load_target(args.app, application)
            inspector = RegistryInspector(target, option_name=args.option or settings.option)

            if args.trace_quiet:
                _trace_option(console, inspector, target, cls.type_name, settings.sentinel)
            else:
                namespace = args.namespace if args.namespace is not None else settings.namespace
                _inspect_registry(console, inspector, target, namespace)
        except ApplicationLoadError:
            raise
        except DefinitionConflictError as e:
            _explain_conflict(console, e, settings.max_frames)
        except argparse.ArgumentError as e:
            # Plain argparse applications collide while their factory runs
            if "conflicting option string" not in (e.message or ""):
                _report_unexpected(e)
            else:
                conflict = conflict_from_argument_error(e)
                conflict.__cause__ = e
                _explain_conflict(console, conflict, settings.max_frames)
        except Exception as e:
            _report_unexpected(e)
        return 0


def _load_target(app: str | None, application):
    if not app:
        return application

    from cmd_inspector.cli.loader import load_application

    return load_application(app)


def _report_unexpected(error: Exception) -> None:
    err = get_error_console()
    err.print(f"\n[red]Unexpected error: {escape(str(error))}[/red]")
    err.print("Stack trace:", markup=False)
    err.print("".join(traceback.format_exception(error)), markup=False)


def _print_warning(warning: InspectionWarning, indent: str = "   ") -> None:
    get_error_console().print(f"{indent}[yellow]{escape(str(warning))}[/yellow]")


def _inspect_registry(console, inspector: RegistryInspector, target, namespace: str | None) -> None:
    """Default mode: list commands, global options, then assemble the parser."""
    option_name = inspector.option_name
    report = inspector.inspect(prefix=namespace or None)

    if namespace:
        console.print(f"\nRegistered commands (namespace '{escape(namespace)}'):")
    else:
        console.print("\nRegistered commands:")

    usage = {}
    for entry in report.usage:
        usage[entry.command] = entry

    warned = set()
    for name, command in report.commands.items():
        entry = usage.get(name)
        if not isinstance(entry, InspectionWarning):
            type_name = inspector.command_type(name, command)
            if isinstance(type_name, InspectionWarning):
                entry = type_name
        if isinstance(entry, InspectionWarning):
            console.print(f"  - {escape(name)}")
            _print_warning(entry, indent="    ")
            warned.add(name)
            continue

        console.print(f"  - {escape(name)}: {escape(type_name)}")
        if entry is not None:
            console.print(f"[yellow]    ⚠️  Has '{escape(option_name)}' option![/yellow]")
            console.print(f"       Description: {escape(entry.description)}")

    if not report.commands:
        console.print("  (none)")

    console.print("\nGlobal application options:")
    for option in report.global_options:
        console.print(f"  - {escape(option.name)} ({escape(option.shortcut)})")

    console.print(f"\nConflicting '{escape(option_name)}' declarations:")
    for warning in report.conflicts.warnings:
        if warning.command not in warned:
            _print_warning(warning, indent="  ")
    if report.conflicts.items:
        for conflict in report.conflicts.items:
            console.print(
                f"[yellow]  - {escape(conflict.command)} ({escape(conflict.type_name)})[/yellow]"
            )
            console.print(f"    Description: {escape(conflict.description)}")
            console.print(f"    Shortcut: {escape(conflict.shortcut)}")
    else:
        console.print(f"  No command re-declares the global '{escape(option_name)}' option.")

    build = getattr(target, "build_parser", None)
    if build is not None:
        build()
        console.print("\n[green]All commands assemble without option conflicts.[/green]")


def _explain_conflict(console, error: DefinitionConflictError, max_frames: int) -> None:
    """Structured explanation of a definition conflict."""
    get_error_console().print(f"\n[red]Definition conflict caught: {escape(error.message)}[/red]")
    console.print("This typically means there's a conflict in option registration.")

    console.print("\nPossible causes:")
    for number, cause in enumerate(CONFLICT_CAUSES, start=1):
        console.print(f"{number}. {cause}")

    # The argparse error holds the frames where the collision happened
    source = error.__cause__ if error.__cause__ is not None else error
    filename, lineno = exception_origin(source)

    console.print("\nDebug information:")
    console.print(f"Exception class: {type(error).__name__}", markup=False)
    if error.command:
        console.print(f"Command: {error.command}", markup=False)
    if error.detail:
        console.print(f"Detail: {error.detail}", markup=False)
    console.print(f"File: {filename}", markup=False)
    console.print(f"Line: {lineno}", markup=False)

    frames = extract_frames(source, limit=max_frames)
    console.print(f"\nStack trace (top {len(frames)} frames):")
    for frame in frames:
        console.print(f"  {frame.format()}", markup=False)


def _minimal_command_options(target):
    """Options a fresh command with no declarations of its own receives."""
    build = getattr(target, "build_command_parser", None)
    if build is not None:
        return options_from_parser(build(_MinimalCommand))
    return options_from_parser(argparse.ArgumentParser(add_help=False))


def _application_type_name(target) -> str:
    getter = getattr(target, "get_type_name", None)
    return getter() if getter is not None else type(target).__name__


def _trace_option(
    console, inspector: RegistryInspector, target, type_name: str, sentinel: str
) -> None:
    """Trace mode: where does the watched option come from?"""
    option_name = inspector.option_name
    title = option_name.capitalize()

    console.print(f"[green]=== Tracing {escape(title)} Option Registrations ===[/green]")
    console.print("")

    console.print("1. Checking default command options:")
    minimal = next((o for o in _minimal_command_options(target) if o.name == option_name), None)
    console.print(
        f"   Minimal command has {escape(option_name)} option: {'YES' if minimal else 'NO'}"
    )
    if minimal is not None:
        console.print(f"   - Shortcut: {escape(minimal.shortcut)}")
        console.print(f"   - Description: {escape(minimal.description)}")

    console.print("")
    console.print(f"2. Checking when {escape(option_name)} option is added:")
    console.print(f"   Application class: {escape(_application_type_name(target))}")
    has_global = inspector.global_option() is not None
    console.print(
        f"   Application has global {escape(option_name)}: {'YES' if has_global else 'NO'}"
    )

    console.print("")
    console.print("3. Analyzing potential conflicts:")
    conflicts = inspector.find_conflicts()
    for warning in conflicts.warnings:
        _print_warning(warning)

    if not conflicts.items:
        console.print(f"[green]   No conflicting {escape(option_name)} options found.[/green]")
    else:
        console.print(
            f"[yellow]   Found commands with different {escape(option_name)} options:[/yellow]"
        )
        for conflict in conflicts.items:
            console.print(f"   - {escape(conflict.command)} ({escape(conflict.type_name)})")
            console.print(f"     Description: {escape(conflict.description)}")
            console.print(f"     Shortcut: {escape(conflict.shortcut)}")

    console.print("")
    console.print("4. Checking command inheritance:")
    console.print(f"   {escape(type_name)} inheritance chain:")
    indent = "   "
    for ancestor in inspector.describe_inheritance(type_name, sentinel=sentinel):
        console.print(f"{indent}- {escape(ancestor)}")
        indent += "  "

    console.print("")
    console.print("[green]=== Trace Complete ===[/green]")
    console.print("")
    console.print(f'To fix the "{escape(option_name)} option already exists" error:')
    console.print(f"1. Ensure commands don't manually add a {escape(option_name)} option")
    console.print("2. Check if any command classes are modifying their parser definitions")
    console.print(f"3. Verify no command is trying to override the global {escape(option_name)} option")

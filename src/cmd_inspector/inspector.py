"""
Registry inspector: finds duplicate declarations of a global option.

A command "conflicts" when it carries an option with the watched name
(``quiet`` by default) that is a different declaration from the
application's global option of the same name. Inherited options are the
same object and never conflict, even though they share the name.

Example::

    from cmd_inspector.inspector import RegistryInspector

    inspector = RegistryInspector(app)
    for entry in inspector.find_conflicts():
        print(entry)

Lookups that fail for one command are isolated: they show up as an
``InspectionWarning`` at that command's position and the scan moves on.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from cmd_inspector.lineage import COMMAND_LINEAGE, TypeLineage
from cmd_inspector.options import Option
from cmd_inspector.protocols import CommandView, Registry

logger = logging.getLogger(__name__)

__all__ = [
    "RegistryInspector",
    "QuietUsage",
    "ConflictReport",
    "InspectionWarning",
    "InspectionReport",
    "ScanResult",
    "DEFAULT_OPTION_NAME",
]

DEFAULT_OPTION_NAME = "quiet"

T = TypeVar("T")


@dataclass(frozen=True)
class QuietUsage:
    """A command that declares the watched option."""

    command: str
    type_name: str
    option: Option

    @property
    def description(self) -> str:
        return self.option.description


@dataclass(frozen=True)
class ConflictReport:
    """A command whose option duplicates the global declaration."""

    command: str
    option_name: str
    description: str
    shortcut: str
    type_name: str = ""


@dataclass(frozen=True)
class InspectionWarning:
    """Introspection of one command failed."""

    command: str
    message: str
    error_type: str = ""

    def __str__(self) -> str:
        return f"Error checking command '{self.command}': {self.message}"


@dataclass
class ScanResult(Generic[T]):
    """Ordered scan output: results and warnings in registry order."""

    entries: list[T | InspectionWarning] = field(default_factory=list)

    @property
    def items(self) -> list[T]:
        return [e for e in self.entries if not isinstance(e, InspectionWarning)]

    @property
    def warnings(self) -> list[InspectionWarning]:
        return [e for e in self.entries if isinstance(e, InspectionWarning)]

    def __iter__(self) -> Iterator[T | InspectionWarning]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)


@dataclass
class InspectionReport:
    """Everything ``RegistryInspector.inspect`` found in one pass."""

    commands: dict[str, CommandView]
    usage: ScanResult[QuietUsage]
    conflicts: ScanResult[ConflictReport]
    global_options: list[Option]

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts.items)


class RegistryInspector:
    """Read-only inspector over a command registry.

    Args:
        registry: Object providing ``list_all()`` and ``get_global_options()``
        option_name: Name of the option to watch (default: "quiet")
        lineage: Type lineage table used by ``describe_inheritance``
    """

    def __init__(
        self,
        registry: Registry,
        option_name: str = DEFAULT_OPTION_NAME,
        lineage: TypeLineage | None = None,
    ):
        self.registry = registry
        self.option_name = option_name
        self.lineage = lineage if lineage is not None else COMMAND_LINEAGE

    def list_namespaced_commands(self, prefix: str) -> dict[str, CommandView]:
        """Commands whose name starts with ``prefix``, in registry order."""
        if not prefix:
            raise ValueError("Namespace prefix must not be empty")

        return {
            name: command
            for name, command in self.registry.list_all().items()
            if name.startswith(prefix)
        }

    def global_option(self) -> Option | None:
        """The application's global option with the watched name."""
        return _find_option(self.registry.get_global_options(), self.option_name)

    def command_type(self, name: str, command: CommandView) -> str | InspectionWarning:
        """Type name of one command, or a warning if it cannot be read."""
        try:
            return command.get_type_name()
        except Exception as e:
            return _warning_for(name, e)

    def report_quiet_usage(
        self, commands: Mapping[str, CommandView] | None = None
    ) -> ScanResult[QuietUsage]:
        """Commands that carry the watched option.

        Args:
            commands: Commands to check (default: the whole registry)
        """
        if commands is None:
            commands = self.registry.list_all()

        result: ScanResult[QuietUsage] = ScanResult()
        for name, command in commands.items():
            try:
                option = _find_option(command.get_options(), self.option_name)
                if option is None:
                    continue
                type_name = command.get_type_name()
            except Exception as e:
                result.entries.append(_warning_for(name, e))
                continue

            result.entries.append(QuietUsage(command=name, type_name=type_name, option=option))

        return result

    def find_conflicts(self) -> ScanResult[ConflictReport]:
        """Commands that declare their own copy of the global option."""
        global_opt = self.global_option()
        result: ScanResult[ConflictReport] = ScanResult()

        for name, command in self.registry.list_all().items():
            try:
                option = _find_option(command.get_options(), self.option_name)
                if option is None or global_opt is None:
                    continue
                if option.same_declaration(global_opt):
                    continue
                type_name = command.get_type_name()
            except Exception as e:
                result.entries.append(_warning_for(name, e))
                continue

            logger.debug("Command %s redeclares --%s", name, self.option_name)
            result.entries.append(
                ConflictReport(
                    command=name,
                    option_name=self.option_name,
                    description=option.description,
                    shortcut=option.shortcut,
                    type_name=type_name,
                )
            )

        return result

    def describe_inheritance(self, type_name: str, sentinel: str | None = None) -> list[str]:
        """Ancestry of ``type_name``, most-derived first, up to ``sentinel``."""
        return self.lineage.ancestry(type_name, sentinel=sentinel)

    def inspect(self, prefix: str | None = None) -> InspectionReport:
        """Run every scan once.

        Args:
            prefix: Restrict the command listing and usage scan to a
                namespace. None inspects every command.
        """
        if prefix:
            commands = self.list_namespaced_commands(prefix)
        else:
            commands = dict(self.registry.list_all())

        return InspectionReport(
            commands=commands,
            usage=self.report_quiet_usage(commands),
            conflicts=self.find_conflicts(),
            global_options=list(self.registry.get_global_options()),
        )


def _find_option(options, name: str) -> Option | None:
    for option in options:
        if option.name == name:
            return option
    return None


def _warning_for(command: str, error: Exception) -> InspectionWarning:
    logger.warning("Error checking command '%s': %s", command, error)
    message = getattr(error, "message", None) or str(error)
    return InspectionWarning(command=command, message=message, error_type=type(error).__name__)

"""Collaborator protocols for the registry inspector.

The inspector only reads through these interfaces. Anything that
provides them can be inspected: the bundled ``ConsoleApplication``, a
plain argparse parser wrapped in ``ParserRegistry``, or an in-memory
``StaticRegistry``.
"""

from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable

from cmd_inspector.options import Option


@runtime_checkable
class CommandView(Protocol):
    """Read-only view of one registered command.

    Attributes:
        name: Registered command name (e.g. "app:sync").

    Methods:
        get_options: All options the command accepts, including inherited
            global options. May raise if the definition cannot be built.
        get_type_name: Concrete type name of the command.
    """

    name: str

    def get_options(self) -> Sequence[Option]: ...

    def get_type_name(self) -> str: ...


@runtime_checkable
class OptionSource(Protocol):
    """A command registry."""

    def list_all(self) -> Mapping[str, CommandView]:
        """Commands keyed by name, in registration order."""
        ...


@runtime_checkable
class GlobalOptionSource(Protocol):
    """An application that declares global options."""

    def get_global_options(self) -> Sequence[Option]: ...


@runtime_checkable
class Registry(OptionSource, GlobalOptionSource, Protocol):
    """Both halves of what the inspector reads."""

"""In-memory registry for library callers and tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from cmd_inspector.options import Option

__all__ = ["StaticCommand", "StaticRegistry"]


@dataclass
class StaticCommand:
    """A command described by data.

    ``options`` may be a callable, evaluated on every ``get_options()``
    call, to model commands whose definition is built lazily and may fail.
    """

    name: str
    type_name: str = "Command"
    options: Sequence[Option] | Callable[[], Sequence[Option]] = field(default_factory=list)

    def get_options(self) -> Sequence[Option]:
        if callable(self.options):
            return self.options()
        return self.options

    def get_type_name(self) -> str:
        return self.type_name


@dataclass
class StaticRegistry:
    """Commands and global options held in plain containers."""

    commands: dict[str, StaticCommand] = field(default_factory=dict)
    global_options: list[Option] = field(default_factory=list)

    def add(self, command: StaticCommand) -> StaticCommand:
        self.commands[command.name] = command
        return command

    def list_all(self) -> dict[str, StaticCommand]:
        return dict(self.commands)

    def get_global_options(self) -> list[Option]:
        return list(self.global_options)

"""
Option model for command definitions.

Provides the read-only ``Option`` view used by the inspector, the
declarative ``OptionSpec`` used by command classes, and the explicit
merge step that attaches default options to a command unless they are
already present.

Example::

    from cmd_inspector.options import OptionSpec, merge_options

    declared = [OptionSpec("dry-run", description="Show changes only")]
    defaults = [OptionSpec("quiet", "q", "Suppress output")]

    # "quiet" is dropped because the parser already inherits -q/--quiet
    specs = merge_options(declared, defaults, reserved={"-q", "--quiet"})
"""

from __future__ import annotations

import argparse
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "Option",
    "OptionSpec",
    "merge_options",
    "option_from_action",
    "options_from_parser",
    "reserved_option_strings",
]


@dataclass(frozen=True, eq=False)
class Option:
    """A declared command-line option.

    Options compare by identity. Two options with the same name and
    description are still different declarations unless they share the
    same ``declared`` object.

    Attributes:
        name: Long option name without dashes (e.g. "quiet")
        shortcut: Short flag without dash (e.g. "q"), or "" when absent
        description: Help text
        declared: Object that physically declared the option, such as an
            ``argparse.Action``. None means the Option is its own declaration.
    """

    name: str
    shortcut: str = ""
    description: str = ""
    declared: Any = field(default=None, repr=False)

    @property
    def identity(self) -> Any:
        """The declaration this option stands for."""
        return self.declared if self.declared is not None else self

    def same_declaration(self, other: Option) -> bool:
        """True if both options come from the same declaration."""
        return self.identity is other.identity


@dataclass(frozen=True)
class OptionSpec:
    """Declarative option used by command classes.

    Attributes:
        name: Long option name without dashes
        shortcut: Single-letter short flag without dash, or ""
        description: Help text
        action: argparse action (default: store_true)
        default: Default value passed to argparse
        metavar: Value placeholder for options that take a value
    """

    name: str
    shortcut: str = ""
    description: str = ""
    action: str = "store_true"
    default: Any = None
    metavar: str | None = None

    @property
    def option_strings(self) -> list[str]:
        strings = []
        if self.shortcut:
            strings.append(f"-{self.shortcut}")
        strings.append(f"--{self.name}")
        return strings

    def add_to(self, parser: argparse._ActionsContainer) -> argparse.Action:
        """Declare this option on an argparse parser or group."""
        kwargs: dict[str, Any] = {"action": self.action, "help": self.description}
        if self.default is not None:
            kwargs["default"] = self.default
        if self.metavar is not None:
            kwargs["metavar"] = self.metavar
        return parser.add_argument(*self.option_strings, **kwargs)


def merge_options(
    declared: Sequence[OptionSpec],
    defaults: Sequence[OptionSpec],
    reserved: Iterable[str] = (),
) -> list[OptionSpec]:
    """Union of declared and default options, declared options first.

    A default is kept only when neither its name nor its shortcut is
    already taken by a declared option or by one of the ``reserved``
    option strings. Declared options are never dropped.

    Args:
        declared: Options the command declares itself
        defaults: Options to attach unless already present
        reserved: Option strings already present on the target parser
            (e.g. inherited global options)

    Returns:
        Ordered list of specs to declare
    """
    taken = set(reserved)
    for spec in declared:
        taken.update(spec.option_strings)

    merged = list(declared)
    for spec in defaults:
        if any(s in taken for s in spec.option_strings):
            continue
        merged.append(spec)
        taken.update(spec.option_strings)
    return merged


def reserved_option_strings(parser: argparse._ActionsContainer) -> set[str]:
    """Option strings already registered on a parser."""
    return set(parser._option_string_actions)


def option_from_action(action: argparse.Action) -> Option | None:
    """Build an Option view of an argparse action.

    Returns None for positional arguments.
    """
    if not action.option_strings:
        return None

    long_names = [s for s in action.option_strings if s.startswith("--")]
    short_names = [
        s for s in action.option_strings if not s.startswith("--") and len(s) == 2
    ]

    if long_names:
        name = long_names[0][2:]
    else:
        name = action.option_strings[0].lstrip("-")
    shortcut = short_names[0][1:] if short_names else ""

    description = action.help or ""
    if description == argparse.SUPPRESS:
        description = ""

    return Option(name=name, shortcut=shortcut, description=description, declared=action)


def options_from_parser(parser: argparse.ArgumentParser) -> list[Option]:
    """Option views for every optional argument on a parser, in order."""
    options = []
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            continue
        option = option_from_action(action)
        if option is not None:
            options.append(option)
    return options

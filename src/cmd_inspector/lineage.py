"""Type lineage table for command classes.

Ancestry shown by the debug command comes from this table, not from
``__mro__``. Command classes record themselves when they are defined
(see ``cmd_inspector.cli.base.Command.__init_subclass__``).
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

__all__ = ["TypeLineage", "COMMAND_LINEAGE", "ROOT_COMMAND_TYPE"]

# Type tag of the framework's root command class
ROOT_COMMAND_TYPE = "Command"


class TypeLineage:
    """Mapping of type name to parent type name."""

    def __init__(self, parents: dict[str, str | None] | None = None):
        self._parents: dict[str, str | None] = dict(parents or {})

    def declare(self, name: str, parent: str | None = None) -> None:
        """Record ``name`` with its parent (None for a root type)."""
        previous = self._parents.get(name)
        if name in self._parents and previous != parent:
            logger.debug("Redeclaring type %s: parent %s -> %s", name, previous, parent)
        self._parents[name] = parent

    def parent_of(self, name: str) -> str | None:
        return self._parents.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._parents

    def __len__(self) -> int:
        return len(self._parents)

    def ancestry(self, name: str, sentinel: str | None = None) -> list[str]:
        """Walk from ``name`` up through declared parents.

        Args:
            name: Most-derived type name
            sentinel: Stop after this type, even if it has a parent

        Returns:
            Type names ordered from most-derived upward. Always starts
            with ``name``, even when it was never declared.
        """
        chain: list[str] = []
        seen: set[str] = set()
        current: str | None = name

        while current is not None and current not in seen:
            chain.append(current)
            seen.add(current)
            if current == sentinel:
                break
            current = self._parents.get(current)

        return chain


COMMAND_LINEAGE = TypeLineage({ROOT_COMMAND_TYPE: None})

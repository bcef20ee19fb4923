"""Registry adapters: expose command registries to the inspector."""

from cmd_inspector.adapters.argparse_registry import ParserCommand, ParserRegistry
from cmd_inspector.adapters.static import StaticCommand, StaticRegistry

__all__ = ["ParserCommand", "ParserRegistry", "StaticCommand", "StaticRegistry"]

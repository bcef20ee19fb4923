"""
cmd-inspector: find duplicate option declarations in command registries.

Inspects an application's registered commands and their options, and
reports commands that declare their own copy of a global option (the
"quiet" flag by default) instead of inheriting it.

Modules:
    inspector: Registry inspector and report types
    options: Option model and default-option merging
    lineage: Command type lineage table
    trace: Short stack excerpts
    adapters: Registry views over argparse parsers and plain data
    cli: Console application and the debug/config commands

Quick Start::

    from cmd_inspector import RegistryInspector
    from cmd_inspector.adapters import ParserRegistry

    inspector = RegistryInspector(ParserRegistry(parser))
    for conflict in inspector.find_conflicts().items:
        print(conflict.command, conflict.description)
"""

__version__ = "0.1.0"

from cmd_inspector.exceptions import (
    DefinitionConflictError,
    InspectorError,
    OptionLookupError,
)
from cmd_inspector.inspector import (
    ConflictReport,
    InspectionWarning,
    QuietUsage,
    RegistryInspector,
)
from cmd_inspector.lineage import COMMAND_LINEAGE, TypeLineage
from cmd_inspector.logging import disable_verbose, enable_verbose
from cmd_inspector.options import Option, OptionSpec, merge_options

__all__ = [
    "__version__",
    # Inspector
    "RegistryInspector",
    "QuietUsage",
    "ConflictReport",
    "InspectionWarning",
    # Options
    "Option",
    "OptionSpec",
    "merge_options",
    # Lineage
    "TypeLineage",
    "COMMAND_LINEAGE",
    # Errors
    "InspectorError",
    "DefinitionConflictError",
    "OptionLookupError",
    # Logging
    "enable_verbose",
    "disable_verbose",
]

"""
Command-line interface for cmd-inspector.

Provides CLI commands via the `cmd-inspector` or `cmdi` command:

    cmd-inspector debug                 - Inspect registered commands and global options
    cmd-inspector debug --trace-quiet   - Trace where the quiet option is declared
    cmd-inspector config                - View/manage configuration

Examples:
    cmdi debug
    cmdi debug --namespace app:
    cmdi debug --trace-quiet --app mypkg.cli:create_parser
    cmdi config get inspect.max_frames
"""

import sys
from typing import List, Optional

from cmd_inspector import __version__
from cmd_inspector.cli.application import ConsoleApplication
from cmd_inspector.cli.registry import discover_commands
from cmd_inspector.cli.utils import print_error
from cmd_inspector.config import Config
from cmd_inspector.exceptions import ConfigurationError

__all__ = ["main", "create_application"]


def create_application(config: Optional[Config] = None) -> ConsoleApplication:
    """Build the cmd-inspector application with all discovered commands."""
    application = ConsoleApplication(
        prog="cmd-inspector",
        version=__version__,
        description="Command registry inspector",
        config=config,
    )
    application.add_commands(discover_commands().values())
    return application


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for cmd-inspector CLI."""
    try:
        config = Config.load()
    except ConfigurationError as e:
        print_error(e)
        return 1

    return create_application(config).run(argv)


if __name__ == "__main__":
    sys.exit(main())

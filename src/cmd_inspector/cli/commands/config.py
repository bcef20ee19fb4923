"""
Config command for cmd-inspector CLI.

Provides commands to view, initialize, and manage configuration.

Usage:
    cmd-inspector config --show             Show effective configuration with sources
    cmd-inspector config --init             Create template config file
    cmd-inspector config --paths            Show config file paths
    cmd-inspector config get <key>          Get a specific config value
    cmd-inspector config set <key> <value>  Show how to set a config value
"""

import argparse
import sys
from pathlib import Path

from cmd_inspector import config as config_module
from cmd_inspector.cli.base import BaseCommand
from cmd_inspector.config import (
    CONFIG_FILENAMES,
    MIN_VALUES,
    Config,
    generate_template,
    get_config_paths,
)


class ConfigCommand(BaseCommand):
    """View and manage cmd-inspector configuration."""

    name = "config"
    help = "View and manage configuration"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        super().add_arguments(parser)

        # Mutually exclusive main actions
        action_group = parser.add_mutually_exclusive_group()
        action_group.add_argument(
            "--show",
            action="store_true",
            help="Show effective configuration with sources",
        )
        action_group.add_argument(
            "--init",
            action="store_true",
            help="Create template config file in current directory",
        )
        action_group.add_argument(
            "--paths",
            action="store_true",
            help="Show config file paths",
        )
        parser.add_argument(
            "--user",
            action="store_true",
            help="Use user config (~/.config/cmd-inspector/config.toml) for --init",
        )
        parser.add_argument(
            "action",
            nargs="?",
            choices=["get", "set"],
            help="Config action (get/set)",
        )
        parser.add_argument("key", nargs="?", help="Config key (e.g., inspect.namespace)")
        parser.add_argument("value", nargs="?", help="Value to set")

    @classmethod
    def run(cls, args: argparse.Namespace) -> int:
        # Loaded by the application at startup; errors there never reach here
        config = args._application.config

        if args.init:
            return _init_config(args.user)
        elif args.paths:
            return _show_paths()
        elif args.action == "get":
            if not args.key:
                print("Error: 'get' requires a key argument", file=sys.stderr)
                return 1
            return _get_config(config, args.key)
        elif args.action == "set":
            if not args.key or not args.value:
                print("Error: 'set' requires key and value arguments", file=sys.stderr)
                return 1
            return _set_config(config, args.key, args.value)
        else:
            # Default to showing config
            return _show_config(config)


def _show_config(config: Config) -> int:
    """Show effective configuration with sources."""
    print("# Effective cmd-inspector configuration")
    print()

    print("[defaults]")
    _print_value("verbose", config.defaults.verbose, config.get_source("defaults.verbose"))
    _print_value("quiet", config.defaults.quiet, config.get_source("defaults.quiet"))
    print()

    print("[inspect]")
    _print_value("namespace", config.inspect.namespace, config.get_source("inspect.namespace"))
    _print_value("option", config.inspect.option, config.get_source("inspect.option"))
    _print_value("sentinel", config.inspect.sentinel, config.get_source("inspect.sentinel"))
    _print_value("max_frames", config.inspect.max_frames, config.get_source("inspect.max_frames"))

    return 0


def _format_value(value) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif value is None:
        return "# not set"
    return str(value)


def _print_value(key: str, value, source: str) -> None:
    """Print a config value with its source."""
    # Show just the filename for brevity
    source_display = Path(source).name if source != "default" else source
    print(f"{key} = {_format_value(value)}  # from: {source_display}")


def _show_paths() -> int:
    """Show config file paths."""
    paths = get_config_paths()

    print("Config file paths:")
    print()

    print(f"User config: {config_module.USER_CONFIG_PATH}")
    print("  Status: exists" if paths["user"] else "  Status: not found")
    print()

    print(f"Project config search: {', '.join(CONFIG_FILENAMES)}")
    if paths["project"]:
        print(f"  Found: {paths['project']}")
    else:
        print("  Status: not found")

    return 0


def _init_config(user: bool = False) -> int:
    """Create a template config file."""
    if user:
        target = config_module.USER_CONFIG_PATH
        target.parent.mkdir(parents=True, exist_ok=True)
    else:
        target = Path.cwd() / CONFIG_FILENAMES[0]

    if target.exists():
        print(f"Error: Config file already exists: {target}", file=sys.stderr)
        print("Remove it first or edit manually.", file=sys.stderr)
        return 1

    try:
        target.write_text(generate_template())
    except OSError as e:
        print(f"Error writing config file: {e}", file=sys.stderr)
        return 1

    print(f"Created config template: {target}")
    print()
    print("Edit the file to customize your settings.")
    print("Uncomment and modify values as needed.")
    return 0


def _lookup(config: Config, key: str):
    """Resolve 'section.key'. Prints an error and returns None if invalid."""
    parts = key.split(".")
    if len(parts) != 2:
        print(f"Error: Invalid key format '{key}'. Use 'section.key' format.", file=sys.stderr)
        return None

    section, attr = parts
    section_obj = getattr(config, section, None) if not section.startswith("_") else None
    if section_obj is None:
        print(f"Error: Unknown config section '{section}'", file=sys.stderr)
        return None

    if not hasattr(section_obj, attr):
        print(f"Error: Unknown key '{attr}' in section '{section}'", file=sys.stderr)
        return None

    return section, attr, getattr(section_obj, attr)


def _get_config(config: Config, key: str) -> int:
    """Get a specific config value."""
    found = _lookup(config, key)
    if found is None:
        return 1
    _, _, value = found

    if value is None:
        print("# not set")
    elif isinstance(value, bool):
        print("true" if value else "false")
    else:
        print(value)

    source = config.get_source(key)
    if source != "default":
        print(f"# source: {source}", file=sys.stderr)

    return 0


def _set_config(config: Config, key: str, value: str) -> int:
    """
    Guide user to set a config value.

    Config files are not modified directly; the user is shown what to add.
    """
    found = _lookup(config, key)
    if found is None:
        return 1
    section, attr, current = found

    if isinstance(current, bool):
        if value.lower() in ("true", "1", "yes"):
            formatted = "true"
        elif value.lower() in ("false", "0", "no"):
            formatted = "false"
        else:
            print(f"Error: Invalid boolean value '{value}'", file=sys.stderr)
            return 1
    elif isinstance(current, int):
        try:
            number = int(value)
        except ValueError:
            print(f"Error: Invalid integer value '{value}'", file=sys.stderr)
            return 1
        minimum = MIN_VALUES.get(key)
        if minimum is not None and number < minimum:
            print(f"Error: {key} must be at least {minimum}", file=sys.stderr)
            return 1
        formatted = value
    else:
        formatted = f'"{value}"'

    paths = get_config_paths()
    project_config = paths["project"] or Path.cwd() / CONFIG_FILENAMES[0]

    print(f"To set {key} = {formatted}, add to your config file:")
    print()
    print(f"  File: {project_config}")
    print()
    print(f"  [{section}]")
    print(f"  {attr} = {formatted}")
    print()
    print("Or run: cmd-inspector config --init")

    return 0

"""
Configuration file support for cmd-inspector.

Provides hierarchical configuration loading from:
1. Project config: .cmd-inspector.toml or cmd-inspector.toml in project root
2. User config: ~/.config/cmd-inspector/config.toml

CLI arguments override config file values, and project config overrides user config.
"""

import tomllib
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cmd_inspector.exceptions import ConfigurationError

# Config file names to search for in project directories
CONFIG_FILENAMES = [".cmd-inspector.toml", "cmd-inspector.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "cmd-inspector" / "config.toml"

# All known config keys for validation
KNOWN_KEYS = {
    "defaults": {"verbose", "quiet"},
    "inspect": {"namespace", "option", "sentinel", "max_frames"},
}

# Lower bounds for integer settings
MIN_VALUES = {"inspect.max_frames": 1}


@dataclass
class DefaultsConfig:
    """Default options for CLI commands."""

    verbose: bool = False
    quiet: bool = False


@dataclass
class InspectConfig:
    """Settings for the debug command."""

    namespace: str | None = None
    option: str = "quiet"
    sentinel: str = "Command"
    max_frames: int = 5


@dataclass
class Config:
    """Merged configuration from all sources."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    inspect: InspectConfig = field(default_factory=InspectConfig)

    # Track which file each setting came from (for --show)
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object

        Raises:
            ConfigurationError: If a config file is unreadable or has bad values
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()
        sources: dict[str, str] = {}

        if USER_CONFIG_PATH.exists():
            _merge_config(config, _load_toml_file(USER_CONFIG_PATH), str(USER_CONFIG_PATH), sources)

        project_config = _find_project_config(start_dir)
        if project_config:
            _merge_config(config, _load_toml_file(project_config), str(project_config), sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key."""
        return self._sources.get(key, "default")


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """
    Load a TOML file.

    Raises:
        ConfigurationError: If TOML is invalid or the file cannot be read
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in {path}: {e}", context={"file": str(path)}
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read config file {path}: {e}", context={"file": str(path)}
        ) from e


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """
    Merge loaded config data into Config object.

    Args:
        config: Config object to update
        data: Raw config data from TOML
        source: Source file path (for tracking)
        sources: Dict to update with source info
    """
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    for section_name, known in KNOWN_KEYS.items():
        if section_name not in data:
            continue
        section_data = data[section_name]
        if not isinstance(section_data, dict):
            raise ConfigurationError(
                f"Config section [{section_name}] must be a table",
                context={"file": source},
            )
        _warn_unknown_keys(section_data, known, section_name, source)

        section = getattr(config, section_name)
        for key in known:
            if key not in section_data:
                continue
            value = section_data[key]
            _check_type(section, key, value, source)
            minimum = MIN_VALUES.get(f"{section_name}.{key}")
            if minimum is not None and value < minimum:
                raise ConfigurationError(
                    f"Invalid value for '{key}': {value!r}",
                    context={"file": source, "minimum": minimum},
                )
            setattr(section, key, value)
            sources[f"{section_name}.{key}"] = source


def _check_type(section: Any, key: str, value: Any, source: str) -> None:
    """Reject values whose type does not match the field default."""
    current = getattr(section, key)
    if current is None:
        ok = isinstance(value, str)
    elif isinstance(current, bool):
        ok = isinstance(value, bool)
    elif isinstance(current, int):
        ok = isinstance(value, int) and not isinstance(value, bool)
    else:
        ok = isinstance(value, type(current))

    if not ok:
        raise ConfigurationError(
            f"Invalid value for '{key}': {value!r}",
            context={"file": source, "expected": type(current).__name__ if current is not None else "str"},
        )


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# cmd-inspector configuration file
# Place as .cmd-inspector.toml in project root or ~/.config/cmd-inspector/config.toml for user defaults

[defaults]
# Enable verbose output (debug logging, full tracebacks) by default
# verbose = false

# Enable quiet mode by default
# quiet = false

[inspect]
# Only list commands whose name starts with this prefix
# namespace = "app:"

# Option to check for duplicate declarations
# option = "quiet"

# Stop the inheritance chain at this type
# sentinel = "Command"

# Number of stack frames shown for definition conflicts
# max_frames = 5
"""


def get_config_paths() -> dict[str, Path | None]:
    """
    Get paths to config files that would be loaded.

    Returns:
        Dict with 'user' and 'project' keys
    """
    project_config = _find_project_config(Path.cwd())

    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": project_config,
    }

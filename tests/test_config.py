"""Tests for configuration file support."""

import tomllib
import warnings

import pytest

from cmd_inspector.config import (
    Config,
    DefaultsConfig,
    InspectConfig,
    _find_project_config,
    _load_toml_file,
    generate_template,
    get_config_paths,
)
from cmd_inspector.exceptions import ConfigurationError


class TestConfigDataclasses:
    """Test configuration dataclass defaults."""

    def test_defaults_config_defaults(self):
        """DefaultsConfig has correct defaults."""
        config = DefaultsConfig()
        assert config.verbose is False
        assert config.quiet is False

    def test_inspect_config_defaults(self):
        """InspectConfig has correct defaults."""
        config = InspectConfig()
        assert config.namespace is None
        assert config.option == "quiet"
        assert config.sentinel == "Command"
        assert config.max_frames == 5

    def test_config_defaults(self):
        """Config has correct nested defaults."""
        config = Config()
        assert isinstance(config.defaults, DefaultsConfig)
        assert isinstance(config.inspect, InspectConfig)
        assert config.get_source("inspect.option") == "default"


class TestConfigDiscovery:
    """Test config file discovery."""

    def test_find_project_config_in_current_dir(self, tmp_path):
        """Find config in current directory."""
        config_file = tmp_path / ".cmd-inspector.toml"
        config_file.write_text("[inspect]\nmax_frames = 3\n")

        assert _find_project_config(tmp_path) == config_file

    def test_find_project_config_prefers_hidden(self, tmp_path):
        """Hidden .cmd-inspector.toml is preferred over cmd-inspector.toml."""
        (tmp_path / "cmd-inspector.toml").write_text("[inspect]\n")
        hidden = tmp_path / ".cmd-inspector.toml"
        hidden.write_text("[inspect]\n")

        assert _find_project_config(tmp_path) == hidden

    def test_find_project_config_walks_up(self, tmp_path):
        """Find config by walking up directory tree."""
        parent_config = tmp_path / "cmd-inspector.toml"
        parent_config.write_text("[inspect]\n")

        subdir = tmp_path / "src" / "deep"
        subdir.mkdir(parents=True)

        assert _find_project_config(subdir) == parent_config

    def test_find_project_config_stops_at_git(self, tmp_path):
        """Stop searching at .git directory (don't go above it)."""
        parent = tmp_path / "parent"
        project = parent / "project"
        (project / ".git").mkdir(parents=True)
        (parent / ".cmd-inspector.toml").write_text("[inspect]\n")

        assert _find_project_config(project) is None


class TestLoadToml:
    """Test TOML file loading."""

    def test_load_valid_toml(self, tmp_path):
        """Load valid TOML file."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[inspect]\nnamespace = "app:"\nmax_frames = 8\n')

        result = _load_toml_file(config_file)
        assert result["inspect"]["namespace"] == "app:"
        assert result["inspect"]["max_frames"] == 8

    def test_load_invalid_toml(self, tmp_path):
        """Raise ConfigurationError on invalid TOML."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("invalid [ toml syntax")

        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            _load_toml_file(config_file)

    def test_load_missing_file(self, tmp_path):
        """Raise ConfigurationError on missing file."""
        with pytest.raises(ConfigurationError, match="Cannot read"):
            _load_toml_file(tmp_path / "nonexistent.toml")


class TestConfigLoad:
    """Test Config.load() method."""

    def test_load_defaults_only(self, isolated_config):
        """Load returns defaults when no config files exist."""
        config = Config.load(isolated_config)
        assert config.inspect.option == "quiet"
        assert config._sources == {}

    def test_load_project_config(self, isolated_config):
        """Load project config."""
        (isolated_config / ".cmd-inspector.toml").write_text(
            '[inspect]\nnamespace = "plesk-ext-laravel:"\nsentinel = "BaseCommand"\n'
        )

        config = Config.load(isolated_config)
        assert config.inspect.namespace == "plesk-ext-laravel:"
        assert config.inspect.sentinel == "BaseCommand"

    def test_project_overrides_user(self, tmp_path, isolated_config, monkeypatch):
        """Project config overrides user config; sources are tracked."""
        user_config = tmp_path / "user-config.toml"
        user_config.write_text('[defaults]\nverbose = true\n[inspect]\noption = "force"\n')
        monkeypatch.setattr("cmd_inspector.config.USER_CONFIG_PATH", user_config)

        (isolated_config / ".cmd-inspector.toml").write_text('[inspect]\noption = "silent"\n')

        config = Config.load(isolated_config)
        assert config.inspect.option == "silent"
        assert config.defaults.verbose is True
        assert "user-config.toml" in config.get_source("defaults.verbose")
        assert ".cmd-inspector.toml" in config.get_source("inspect.option")
        assert config.get_source("inspect.max_frames") == "default"

    def test_wrong_type_rejected(self, isolated_config):
        """Values must match the field's type."""
        (isolated_config / ".cmd-inspector.toml").write_text('[inspect]\nmax_frames = "five"\n')

        with pytest.raises(ConfigurationError, match="max_frames"):
            Config.load(isolated_config)

    def test_bool_is_not_int(self, isolated_config):
        """A boolean does not pass as a frame count."""
        (isolated_config / ".cmd-inspector.toml").write_text("[inspect]\nmax_frames = true\n")

        with pytest.raises(ConfigurationError):
            Config.load(isolated_config)

    def test_max_frames_must_be_positive(self, isolated_config):
        """A frame limit below one is rejected."""
        (isolated_config / ".cmd-inspector.toml").write_text("[inspect]\nmax_frames = 0\n")

        with pytest.raises(ConfigurationError, match="max_frames") as exc_info:
            Config.load(isolated_config)
        assert exc_info.value.context["minimum"] == 1

    def test_section_must_be_table(self, isolated_config):
        """A section given as a scalar is an error."""
        (isolated_config / ".cmd-inspector.toml").write_text('inspect = "yes"\n')

        with pytest.raises(ConfigurationError, match=r"\[inspect\] must be a table"):
            Config.load(isolated_config)


class TestConfigWarnings:
    """Test warnings for unknown config keys."""

    def test_warn_unknown_section(self, isolated_config):
        """Warn on unknown top-level section."""
        (isolated_config / ".cmd-inspector.toml").write_text('[unknown_section]\nkey = "value"\n')

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            Config.load(isolated_config)

            assert len(w) == 1
            assert "unknown_section" in str(w[0].message)

    def test_warn_unknown_key_in_section(self, isolated_config):
        """Warn on unknown key within known section."""
        (isolated_config / ".cmd-inspector.toml").write_text('[inspect]\nunknown_key = "value"\n')

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            Config.load(isolated_config)

            assert len(w) == 1
            assert "inspect.unknown_key" in str(w[0].message)


class TestGenerateTemplate:
    """Test template generation."""

    def test_generate_template_valid_toml(self):
        """Generated template parses and sets nothing."""
        result = tomllib.loads(generate_template())
        assert result == {"defaults": {}, "inspect": {}}

    def test_generate_template_documents_options(self):
        """Template documents every known key."""
        template = generate_template()
        for key in ("verbose", "quiet", "namespace", "option", "sentinel", "max_frames"):
            assert key in template


class TestGetConfigPaths:
    """Test get_config_paths function."""

    def test_returns_none_for_missing_files(self, isolated_config):
        """Returns None for missing config files."""
        paths = get_config_paths()
        assert paths["user"] is None
        assert paths["project"] is None

    def test_returns_paths_for_existing_files(self, tmp_path, isolated_config, monkeypatch):
        """Returns paths for existing config files."""
        project_config = isolated_config / ".cmd-inspector.toml"
        project_config.write_text("[defaults]\n")

        user_config = tmp_path / "user.toml"
        user_config.write_text("[defaults]\n")
        monkeypatch.setattr("cmd_inspector.config.USER_CONFIG_PATH", user_config)

        paths = get_config_paths()
        assert paths["user"] == user_config
        assert paths["project"] == project_config

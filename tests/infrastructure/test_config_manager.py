#!/usr/bin/env python3
"""Tests for the ConfigManager module."""

import pytest

from ignorekit.core.constants import ErrorCode
from ignorekit.infrastructure.config_manager import (
    ConfigError,
    ConfigManager,
    ConfigSource,
    get_config_manager,
    set_global_config,
)


class TestConfigSource:
    """Tests for ConfigSource enum."""

    def test_precedence_order(self):
        """Test config source precedence ordering."""
        assert (
            ConfigSource.COMPILED_DEFAULTS.value
            < ConfigSource.USER_CONFIG.value
            < ConfigSource.ENVIRONMENT.value
        )


class TestConfigError:
    """Tests for ConfigError."""

    def test_default_code(self):
        """Test the default error code is INVALID_INPUT."""
        error = ConfigError("bad")
        assert error.message == "bad"
        assert error.error_code == ErrorCode.INVALID_INPUT
        assert str(error) == "bad"


class TestConfigManager:
    """Tests for ConfigManager class."""

    def test_defaults(self):
        """Test compiled defaults are available."""
        config = ConfigManager()
        assert config.get("ignorekit.rules.ignore_file") == ".gitignore"
        assert config.get("ignorekit.rules.encoding") == "utf-8"
        assert config.get("ignorekit.logging.level") == "WARNING"

    def test_missing_key_default(self):
        """Test missing keys return the default."""
        config = ConfigManager()
        assert config.get("ignorekit.nope", default=42) == 42
        assert config.get("ignorekit.rules.ignore_file.deeper") is None

    def test_null_value_uses_default(self):
        """Test a key set to null falls through to the default."""
        assert ConfigManager().get("ignorekit.logging.file", default="x.log") == "x.log"

    def test_load_file(self, config_file):
        """Test values from a YAML file override defaults."""
        config = ConfigManager(config_file)
        assert config.get("ignorekit.rules.ignore_file") == ".dockerignore"
        assert config.get("ignorekit.logging.level") == "DEBUG"

    def test_partial_file_keeps_defaults(self, temp_dir):
        """Test keys absent from the file still resolve to defaults."""
        partial = temp_dir / "partial.yaml"
        partial.write_text("ignorekit:\n  rules:\n    encoding: latin-1\n")
        config = ConfigManager(partial)
        assert config.get("ignorekit.rules.encoding") == "latin-1"
        assert config.get("ignorekit.rules.ignore_file") == ".gitignore"

    def test_load_missing_file(self, temp_dir):
        """Test a missing file raises NOT_FOUND."""
        with pytest.raises(ConfigError) as exc_info:
            ConfigManager(temp_dir / "missing.yaml")
        assert exc_info.value.error_code == ErrorCode.NOT_FOUND

    def test_load_invalid_yaml(self, temp_dir):
        """Test malformed YAML raises INVALID_INPUT."""
        bad = temp_dir / "bad.yaml"
        bad.write_text("ignorekit: [unclosed\n")
        with pytest.raises(ConfigError) as exc_info:
            ConfigManager().load_file(bad)
        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT

    def test_load_non_mapping(self, temp_dir):
        """Test a YAML list is rejected."""
        bad = temp_dir / "list.yaml"
        bad.write_text("- a\n- b\n")
        with pytest.raises(ConfigError) as exc_info:
            ConfigManager().load_file(bad)
        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT

    def test_environment(self, monkeypatch):
        """Test IGNOREKIT_* variables override defaults."""
        monkeypatch.setenv("IGNOREKIT_RULES__IGNORE_FILE", ".npmignore")
        monkeypatch.setenv("IGNOREKIT_LOGGING__LEVEL", "ERROR")
        config = ConfigManager()
        assert config.get("ignorekit.rules.ignore_file") == ".npmignore"
        assert config.get("ignorekit.logging.level") == "ERROR"
        assert config.get("ignorekit.rules.encoding") == "utf-8"

    def test_environment_over_file(self, config_file, monkeypatch):
        """Test environment takes precedence over the user file."""
        monkeypatch.setenv("IGNOREKIT_RULES__IGNORE_FILE", ".npmignore")
        config = ConfigManager(config_file)
        assert config.get("ignorekit.rules.ignore_file") == ".npmignore"
        assert config.get("ignorekit.logging.level") == "DEBUG"

    @pytest.mark.parametrize(
        "raw,expected",
        [("true", True), ("No", False), ("12", 12), ("1.5", 1.5), ("latin-1", "latin-1")],
    )
    def test_environment_values_are_typed(self, monkeypatch, raw, expected):
        """Test environment values are converted to bool, int or float."""
        monkeypatch.setenv("IGNOREKIT_EXTRA__VALUE", raw)
        assert ConfigManager().get("ignorekit.extra.value") == expected

    def test_defaults_not_shared(self, temp_dir):
        """Test loading a file into one instance leaves others untouched."""
        override = temp_dir / "override.yaml"
        override.write_text("ignorekit:\n  rules:\n    ignore_file: .hgignore\n")
        ConfigManager(override)
        assert ConfigManager().get("ignorekit.rules.ignore_file") == ".gitignore"


class TestGlobalConfig:
    """Tests for the global config manager."""

    def test_get_config_manager_is_cached(self):
        """Test the global manager is created once."""
        assert get_config_manager() is get_config_manager()

    def test_set_global_config(self):
        """Test the global manager can be replaced."""
        config = ConfigManager()
        set_global_config(config)
        assert get_config_manager() is config

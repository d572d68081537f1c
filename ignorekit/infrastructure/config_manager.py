#!/usr/bin/env python3
"""Configuration lookup for ignorekit.

Settings live under the ``ignorekit`` key and are resolved from three
layers, highest precedence first:
- Environment variables (``IGNOREKIT_RULES__IGNORE_FILE=.dockerignore``)
- A YAML configuration file
- Compiled defaults (``ignorekit.core.constants.DEFAULT_CONFIG``)

Example:
    >>> config = ConfigManager("ignorekit.yaml")
    >>> config.get("ignorekit.rules.ignore_file")
    '.dockerignore'
"""

import copy
import os
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from ignorekit.core.constants import DEFAULT_CONFIG, ConfigKey, ErrorCode

ENV_PREFIX = "IGNOREKIT_"
ENV_SEPARATOR = "__"


class ConfigSource(Enum):
    """Configuration layers, lowest precedence first."""

    COMPILED_DEFAULTS = 1
    USER_CONFIG = 2
    ENVIRONMENT = 3


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


def _parse_env_value(value: str) -> Any:
    lowered = value.lower()
    if lowered in ("true", "yes"):
        return True
    if lowered in ("false", "no"):
        return False
    for convert in (int, float):
        try:
            return convert(value)
        except ValueError:
            continue
    return value


def _environment_layer(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Build a config layer from IGNOREKIT_* variables.

    Nested keys are joined with a double underscore, so
    IGNOREKIT_LOGGING__LEVEL=DEBUG sets ``ignorekit.logging.level``.
    """
    section: Dict[str, Any] = {}
    for name, value in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        *parents, leaf = name[len(ENV_PREFIX):].lower().split(ENV_SEPARATOR)
        target = section
        for parent in parents:
            target = target.setdefault(parent, {})
        target[leaf] = _parse_env_value(value)
    return {ConfigKey.ROOT: section} if section else {}


class ConfigManager:
    """Layered, thread-safe configuration."""

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_file: Optional YAML config file to load
        """
        self._lock = threading.RLock()
        self._layers: Dict[ConfigSource, Dict[str, Any]] = {
            ConfigSource.COMPILED_DEFAULTS: copy.deepcopy(DEFAULT_CONFIG),
        }

        if config_file:
            self.load_file(config_file)

        environment = _environment_layer(os.environ)
        if environment:
            self._layers[ConfigSource.ENVIRONMENT] = environment

    def load_file(self, file_path: Union[str, Path]) -> None:
        """Load the user configuration layer from a YAML file.

        Args:
            file_path: Path to YAML config file

        Raises:
            ConfigError: If file cannot be read or does not hold a mapping
        """
        path = Path(file_path).expanduser()

        if not path.exists():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}", ErrorCode.INVALID_INPUT)
        except OSError as e:
            raise ConfigError(f"Error loading config {file_path}: {e}", ErrorCode.PERMISSION_DENIED)

        if not isinstance(data, dict):
            raise ConfigError(f"Invalid config format in {file_path}", ErrorCode.INVALID_INPUT)

        with self._lock:
            self._layers[ConfigSource.USER_CONFIG] = data

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key in the highest layer that defines it.

        Args:
            key: Dot-separated key path (e.g., "ignorekit.rules.ignore_file")
            default: Value returned when no layer defines the key

        Returns:
            Configuration value or default
        """
        parts = key.split(".")
        with self._lock:
            for source in sorted(self._layers, key=lambda s: s.value, reverse=True):
                node: Any = self._layers[source]
                for part in parts:
                    if not isinstance(node, dict) or part not in node:
                        break
                    node = node[part]
                else:
                    if node is not None:
                        return node
        return default


# Global config manager instance
_global_config: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get or create the global configuration manager."""
    global _global_config
    if _global_config is None:
        _global_config = ConfigManager()
    return _global_config


def set_global_config(config: Optional[ConfigManager]) -> None:
    """Set the global configuration manager, or None to reset it."""
    global _global_config
    _global_config = config

"""ignorekit Infrastructure Layer.

Services used by the rules layer:
- ConfigManager: Layered configuration (defaults, YAML file, environment)
- Logger: Key=value logging configured from the ``ignorekit.logging`` section
"""

from .config_manager import ConfigError
from .config_manager import ConfigManager as Config
from .config_manager import ConfigSource, get_config_manager, set_global_config
from .logger import Logger, LogLevel, get_logger, set_global_logger

__all__ = [
    # Logger exports
    "Logger",
    "LogLevel",
    "get_logger",
    "set_global_logger",
    # ConfigManager exports
    "ConfigSource",
    "ConfigError",
    "Config",
    "get_config_manager",
    "set_global_config",
]

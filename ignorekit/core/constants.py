"""
ignorekit Core: Constants and Type Definitions

This module provides package-wide constants, error codes, the evaluation
verdict and configuration keys.
"""
from enum import Enum, IntEnum

# Version information
IGNOREKIT_VERSION = "1.0.0"


class ErrorCode(IntEnum):
    """Standardized error codes for ignorekit operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad path, invalid configuration
    NOT_FOUND = 2  # File or resource doesn't exist
    PERMISSION_DENIED = 3  # Insufficient permissions
    INTERNAL_ERROR = 6  # Bug in ignorekit


class Verdict(Enum):
    """Outcome of evaluating every rule of a rule set against one path."""

    UNMATCHED = "unmatched"  # No rule matched
    MATCHED = "matched"  # Excluded by a rule
    NEGATED = "negated"  # Excluded, then re-included by a "!" rule


# Rule syntax
COMMENT_PREFIX = "#"
NEGATION_PREFIX = "!"
ESCAPE_CHAR = "\\"
PATH_SEPARATOR = "/"

DEFAULT_IGNORE_FILE = ".gitignore"
DEFAULT_ENCODING = "utf-8"


class ConfigKey:
    """Configuration key constants."""

    # Top-level keys
    ROOT = "ignorekit"
    LOGGING = "logging"
    RULES = "rules"

    # Logging configuration
    LOG_LEVEL = "level"
    LOG_FILE = "file"

    # Rule configuration
    IGNORE_FILE = "ignore_file"
    ENCODING = "encoding"


# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.ROOT: {
        ConfigKey.LOGGING: {
            ConfigKey.LOG_LEVEL: "WARNING",
            ConfigKey.LOG_FILE: None,
        },
        ConfigKey.RULES: {
            ConfigKey.IGNORE_FILE: DEFAULT_IGNORE_FILE,
            ConfigKey.ENCODING: DEFAULT_ENCODING,
        },
    }
}

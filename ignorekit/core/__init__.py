"""ignorekit Core - Shared constants and type definitions.

Import specific names from submodules:
    from ignorekit.core.constants import ErrorCode, Verdict
"""

from ignorekit.core import constants

__all__ = [
    "constants",
]

"""ignorekit - gitignore-style rule matching.

Compile gitignore rule lines (or an ignore file) into a RuleSet and ask it
whether a path is excluded, re-included, or untouched:

    >>> from ignorekit import compile_ignore_lines, Verdict
    >>> rules = compile_ignore_lines("build/", "*.log", "!important.log")
    >>> rules.matches_path("build/out.o") is Verdict.MATCHED
    True
"""

from ignorekit.core.constants import IGNOREKIT_VERSION, Verdict
from ignorekit.rules import (
    IgnorePattern,
    RuleSet,
    compile_ignore_directory,
    compile_ignore_file,
    compile_ignore_file_and_lines,
    compile_ignore_lines,
    compile_pattern,
)

__version__ = IGNOREKIT_VERSION

__all__ = [
    "Verdict",
    "IgnorePattern",
    "RuleSet",
    "compile_pattern",
    "compile_ignore_lines",
    "compile_ignore_file",
    "compile_ignore_file_and_lines",
    "compile_ignore_directory",
]

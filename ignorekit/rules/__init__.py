"""ignorekit Rules System.

This module provides gitignore rule compilation and evaluation:
- compile_pattern: One rule line to an IgnorePattern
- RuleSet: Ordered rules evaluated to a Verdict

Rules are evaluated in source order; later rules override earlier ones and
negated ("!") rules re-include paths an earlier rule excluded.
"""

from .engine import (
    RuleSet,
    compile_ignore_directory,
    compile_ignore_file,
    compile_ignore_file_and_lines,
    compile_ignore_lines,
)
from .patterns import IgnorePattern, compile_pattern, translate_glob

__all__ = [
    # Pattern compilation
    "IgnorePattern",
    "compile_pattern",
    "translate_glob",
    # Rule set evaluation
    "RuleSet",
    "compile_ignore_lines",
    "compile_ignore_file",
    "compile_ignore_file_and_lines",
    "compile_ignore_directory",
]

#!/usr/bin/env python3
"""Rule set evaluation for gitignore-style rules.

This module combines compiled patterns into an ordered RuleSet:
- Rules are evaluated in file order, later rules override earlier ones
- A negated rule only re-includes a path an earlier rule excluded
- Paths are made relative to the ignore file's directory when possible
- Rule sets are immutable; appending lines returns a new set

Example:
    >>> rules = compile_ignore_lines("*.log", "!keep.log")
    >>> rules.matches_path("debug.log")
    <Verdict.MATCHED: 'matched'>
    >>> rules.includes_path("keep.log")
    True
"""

import os
import posixpath
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple, Union

from ignorekit.core.constants import DEFAULT_ENCODING, DEFAULT_IGNORE_FILE, ConfigKey, ErrorCode, Verdict
from ignorekit.infrastructure.config_manager import ConfigManager, get_config_manager
from ignorekit.infrastructure.logger import get_logger
from ignorekit.rules.patterns import IgnorePattern, compile_pattern

PathLike = Union[str, "os.PathLike[str]"]


class RuleSet:
    """Ordered, immutable collection of compiled ignore patterns.

    Each pattern carries its own negation flag, so matchers and flags stay
    paired in source order.
    """

    def __init__(self, patterns: Iterable[IgnorePattern] = (), base_path: Optional[str] = None):
        """Initialize rule set.

        Args:
            patterns: Compiled patterns in source order
            base_path: Directory that query paths are made relative to
        """
        self._patterns: Tuple[IgnorePattern, ...] = tuple(patterns)
        self._base_path = base_path

    @property
    def patterns(self) -> Tuple[IgnorePattern, ...]:
        return self._patterns

    @property
    def base_path(self) -> Optional[str]:
        return self._base_path

    def append_lines(self, *lines: str) -> "RuleSet":
        """Return a new rule set with extra rule lines after the existing ones.

        Args:
            *lines: Raw rule lines

        Returns:
            New rule set sharing this set's base path
        """
        return RuleSet(self._patterns + _compile_lines(lines), self._base_path)

    def _relative_path(self, path: str) -> str:
        """Make a "/"-separated path relative to the base path, cleaned.

        Falls back to the cleaned path when no relative form exists.
        """
        # normpath("") would be "."
        cleaned = posixpath.normpath(path) if path else path
        if self._base_path is None:
            return cleaned

        base = self._base_path.replace("\\", "/")
        if posixpath.isabs(path) != posixpath.isabs(base):
            return cleaned
        try:
            return posixpath.relpath(path, base)
        except ValueError:
            return cleaned

    def matches_path_how(
        self, path: PathLike, is_dir: bool = False
    ) -> Tuple[Verdict, Optional[IgnorePattern]]:
        """Evaluate every rule against a path.

        Args:
            path: Path to check
            is_dir: Whether the path names a directory (implied by a trailing "/")

        Returns:
            Final verdict and the pattern that last changed it (None if unmatched)
        """
        path = os.fspath(path).replace("\\", "/")
        # "build/" names a directory
        is_dir = is_dir or path.endswith("/")
        candidate = self._relative_path(path)

        verdict = Verdict.UNMATCHED
        deciding: Optional[IgnorePattern] = None
        for pattern in self._patterns:
            if not pattern.matches(candidate, is_dir=is_dir):
                continue
            if not pattern.negated:
                verdict = Verdict.MATCHED
                deciding = pattern
            elif verdict is Verdict.MATCHED:
                verdict = Verdict.NEGATED
                deciding = pattern

        return verdict, deciding

    def matches_path(self, path: PathLike, is_dir: bool = False) -> Verdict:
        """Evaluate every rule against a path.

        Args:
            path: Path to check
            is_dir: Whether the path names a directory (implied by a trailing "/")

        Returns:
            UNMATCHED, MATCHED (excluded) or NEGATED (re-included)
        """
        return self.matches_path_how(path, is_dir=is_dir)[0]

    def includes_path(self, path: PathLike, is_dir: bool = False) -> bool:
        """Return True if the path was excluded and then explicitly re-included."""
        return self.matches_path(path, is_dir=is_dir) is Verdict.NEGATED

    def ignores_path(self, path: PathLike, is_dir: bool = False) -> bool:
        """Return True if the path is excluded by the rules."""
        return self.matches_path(path, is_dir=is_dir) is Verdict.MATCHED

    def __iter__(self) -> Iterator[IgnorePattern]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __bool__(self) -> bool:
        return bool(self._patterns)

    def __repr__(self) -> str:
        return f"RuleSet(rules={len(self._patterns)}, base_path={self._base_path!r})"


def _compile_lines(lines: Iterable[str]) -> Tuple[IgnorePattern, ...]:
    compiled = (compile_pattern(line) for line in lines)
    return tuple(pattern for pattern in compiled if pattern is not None)


def compile_ignore_lines(*lines: str) -> RuleSet:
    """Compile rule lines into a rule set.

    Blank and comment lines are skipped; every other line yields a rule.

    Args:
        *lines: Raw rule lines in precedence order

    Returns:
        Rule set without a base path
    """
    return RuleSet(_compile_lines(lines))


def _read_lines(fpath: PathLike, encoding: str) -> list:
    logger = get_logger()
    try:
        text = Path(fpath).read_text(encoding=encoding)
    except OSError as e:
        if isinstance(e, PermissionError):
            error_code = ErrorCode.PERMISSION_DENIED
        elif isinstance(e, FileNotFoundError):
            error_code = ErrorCode.NOT_FOUND
        else:
            error_code = ErrorCode.INVALID_INPUT
        logger.error(
            "Failed to read ignore file",
            ignore_file=os.fspath(fpath),
            error_code=error_code.name,
            error=str(e),
        )
        raise
    return text.split("\n")


def compile_ignore_file_and_lines(
    fpath: PathLike, *lines: str, encoding: str = DEFAULT_ENCODING
) -> RuleSet:
    """Compile an ignore file followed by extra rule lines.

    Query paths are made relative to the directory holding the file.

    Args:
        fpath: Path to the ignore file
        *lines: Extra rule lines evaluated after the file's rules
        encoding: Text encoding of the file

    Returns:
        Rule set with the file's directory as base path

    Raises:
        OSError: If the file cannot be read
    """
    file_lines = _read_lines(fpath, encoding)
    rules = RuleSet(
        _compile_lines(file_lines) + _compile_lines(lines),
        base_path=os.path.dirname(os.fspath(fpath)) or os.curdir,
    )
    get_logger().info(
        "Loaded ignore file", ignore_file=os.fspath(fpath), rules=len(rules)
    )
    return rules


def compile_ignore_file(fpath: PathLike, encoding: str = DEFAULT_ENCODING) -> RuleSet:
    """Compile an ignore file.

    Args:
        fpath: Path to the ignore file
        encoding: Text encoding of the file

    Returns:
        Rule set with the file's directory as base path

    Raises:
        OSError: If the file cannot be read
    """
    return compile_ignore_file_and_lines(fpath, encoding=encoding)


def compile_ignore_directory(
    directory: PathLike, config: Optional[ConfigManager] = None
) -> RuleSet:
    """Compile the ignore file that lives in a directory.

    The file name and encoding come from the ``ignorekit.rules`` config
    section (".gitignore" and "utf-8" by default).

    Args:
        directory: Directory holding the ignore file
        config: Configuration manager, the global one if omitted

    Returns:
        Rule set with the directory as base path

    Raises:
        OSError: If the ignore file cannot be read
    """
    config = config or get_config_manager()
    section = f"{ConfigKey.ROOT}.{ConfigKey.RULES}"
    name = config.get(f"{section}.{ConfigKey.IGNORE_FILE}", DEFAULT_IGNORE_FILE)
    encoding = config.get(f"{section}.{ConfigKey.ENCODING}", DEFAULT_ENCODING)
    return compile_ignore_file(os.path.join(os.fspath(directory), name), encoding=encoding)

#!/usr/bin/env python3
r"""Compilation of gitignore rule lines into path matchers.

This module turns one line of gitignore syntax into an IgnorePattern:
- Comment ("#...") and blank lines produce no pattern
- Leading "!" negates the rule, "\#" and "\!" escape a literal prefix
- Leading "/" anchors the rule to the start of the relative path
- "*", "?", "[...]" and "**" follow gitignore glob semantics
- A rule that names a directory also matches everything beneath it

Example:
    >>> pattern = compile_pattern("node_modules")
    >>> pattern.matches("node_modules/lib/index.js")
    True
    >>> compile_pattern("# a comment") is None
    True
"""

import re
from dataclasses import dataclass
from typing import Optional, Pattern

from ignorekit.core.constants import COMMENT_PREFIX, ESCAPE_CHAR, NEGATION_PREFIX, PATH_SEPARATOR
from ignorekit.infrastructure.logger import get_logger

# Line classification, built once at import
_COMMENT_LINE = re.compile(r"^" + re.escape(COMMENT_PREFIX))
_ESCAPED_PREFIX = re.compile(r"^\\[#!]")
_DIR_EXTENSION_GLOB = re.compile(r"[^/]/.*\*\.")

# One member of a bracket expression: an escaped character or anything but "]", "/", "\"
_CLASS_CHAR = r"(?:\\[^/]|[^\]/\\])"

_GLOB_TOKEN = re.compile(
    r"""
      (?P<globstar>\*\*/?)
    | (?P<star>\*)
    | (?P<single>\?)
    | (?P<bracket>\[(?:[!^](?:\]C*|C+)|\]C*|(?![!^])C+)\])
    | (?P<escaped>\\.)
    | (?P<literal>.)
    """.replace("C", _CLASS_CHAR),
    re.VERBOSE | re.DOTALL,
)
_BRACKET_MEMBER = re.compile(r"\\(.)|(.)", re.DOTALL)

# Regex fragments for each glob construct
_ANY_SEGMENTS = "(?:.*/)?"  # "**/": zero or more whole directories
_ANYTHING = ".*"  # bare "**"
_SEGMENT_CHARS = "[^/]+"  # "*": never crosses a directory boundary
_SEGMENT_CHAR = "[^/]"  # "?"
_UNANCHORED_PREFIX = "^(?:.*/)?"  # any path-segment boundary
_ANCHORED_PREFIX = "^"
_SELF_OR_DESCENDANT = r"(?:/.+)?\Z"
_DESCENDANT_ONLY = r"/.+\Z"


@dataclass(frozen=True)
class IgnorePattern:
    """A compiled gitignore rule.

    Attributes:
        source: Rule line the pattern was compiled from
        regex: Expression matching the path itself or anything beneath it
        negated: True when the line started with "!"
        anchored: True when the rule only matches from the start of the path
        directory_only: True when the line ended with "/"
        descendant_regex: Expression matching only paths beneath the target,
            set for directory-only rules
    """

    source: str
    regex: Pattern
    negated: bool = False
    anchored: bool = False
    directory_only: bool = False
    descendant_regex: Optional[Pattern] = None

    def matches(self, path: str, is_dir: bool = False) -> bool:
        """Check whether a normalized relative path is targeted by this rule.

        Args:
            path: Relative path using "/" separators
            is_dir: Whether the path names a directory

        Returns:
            True if the rule matches the path
        """
        if self.descendant_regex is not None and not is_dir:
            return self.descendant_regex.match(path) is not None
        return self.regex.match(path) is not None


def _translate_bracket(token: str) -> str:
    body = token[1:-1]
    negated = body[0] in "!^"
    if negated:
        body = body[1:]

    members = []
    for escaped, plain in _BRACKET_MEMBER.findall(body):
        char = escaped or plain
        members.append("-" if plain == "-" else re.escape(char))
    # A negated class still never matches the separator
    fragment = ("[^/" if negated else "[") + "".join(members) + "]"

    try:
        re.compile(fragment)
    except re.error as e:
        get_logger().warning("Invalid bracket expression, matching literally", bracket=token, error=str(e))
        return re.escape(token)
    return fragment


def translate_glob(glob: str) -> str:
    """Translate a gitignore glob body into a regular expression fragment.

    Args:
        glob: Glob with prefix markers ("!", "/") and trailing "/" removed

    Returns:
        Regular expression fragment without anchors or suffix
    """
    parts = []
    for token in _GLOB_TOKEN.finditer(glob):
        kind = token.lastgroup
        text = token.group()
        if kind == "globstar":
            parts.append(_ANY_SEGMENTS if text.endswith(PATH_SEPARATOR) else _ANYTHING)
        elif kind == "star":
            parts.append(_SEGMENT_CHARS)
        elif kind == "single":
            parts.append(_SEGMENT_CHAR)
        elif kind == "bracket":
            parts.append(_translate_bracket(text))
        elif kind == "escaped":
            parts.append(re.escape(text[1]))
        else:
            parts.append(re.escape(text))
    return "".join(parts)


def compile_pattern(line: str) -> Optional[IgnorePattern]:
    """Compile one rule line.

    Args:
        line: Raw line, possibly still carrying a trailing carriage return

    Returns:
        The compiled pattern, or None for blank and comment lines
    """
    line = line.rstrip("\r")
    source = line

    if _COMMENT_LINE.match(line.lstrip(" ")):
        return None

    # TODO: keep trailing spaces that are escaped with a backslash
    line = line.strip(" ")
    if not line:
        return None

    negated = line.startswith(NEGATION_PREFIX)
    if negated:
        line = line[1:]

    if _ESCAPED_PREFIX.match(line):
        line = line[len(ESCAPE_CHAR):]

    anchored = line.startswith(PATH_SEPARATOR)
    if anchored:
        line = line[1:]

    directory_only = line.endswith(PATH_SEPARATOR)
    if directory_only:
        line = line.rstrip(PATH_SEPARATOR)

    # "dir/*.ext" is matched against the full relative path
    if _DIR_EXTENSION_GLOB.search(line):
        anchored = True

    prefix = (_ANCHORED_PREFIX if anchored else _UNANCHORED_PREFIX) + translate_glob(line)
    regex = re.compile(prefix + _SELF_OR_DESCENDANT)
    descendant_regex = None
    if directory_only:
        descendant_regex = re.compile(prefix + _DESCENDANT_ONLY)

    get_logger().debug(
        "Compiled ignore pattern",
        pattern=source,
        regex=regex.pattern,
        negated=negated,
        anchored=anchored,
        directory_only=directory_only,
    )

    return IgnorePattern(
        source=source,
        regex=regex,
        negated=negated,
        anchored=anchored,
        directory_only=directory_only,
        descendant_regex=descendant_regex,
    )

"""
Shell-style glob patterns matched against file basenames.

Patterns are parsed as shell globs up front, so a malformed pattern fails
before anything is listed, then rewritten in gitignore syntax and compiled
with `pathspec`. Only single names are matched: a pattern containing a
separator never matches.
"""

from __future__ import annotations

import re

import pathspec

from depgather.errors import GlobError

# Characters that make a leading position special in gitignore syntax.
_GITIGNORE_LEADING = frozenset("!#")

# Class members pathspec reads specially depending on where they sit.
_CLASS_SPECIALS = "]^!-"


def check_glob_syntax(pattern: str) -> None:
    """Raise `GlobError` if `pattern` is not a well-formed shell glob."""
    _to_gitignore_line(pattern)


def _parse_class(pattern: str, i: int) -> tuple[bool, list[tuple[str, str]], int]:
    """
    Parse a `[...]` class starting just after `[`.

    Returns `(negated, ranges, end)` where each range is an unescaped
    `(lo, hi)` pair (equal for single characters) and `end` is the index
    after the closing `]`.
    """
    n = len(pattern)
    negated = i < n and pattern[i] in "^!"
    if negated:
        i += 1
    ranges: list[tuple[str, str]] = []
    while True:
        if i < n and pattern[i] == "]" and ranges:
            return negated, ranges, i + 1
        lo, i = _class_char(pattern, i)
        hi = lo
        if i < n and pattern[i] == "-":
            hi, i = _class_char(pattern, i + 1)
            if hi < lo:
                raise GlobError(
                    f"bad character range {lo}-{hi} in glob {pattern!r}", {"pattern": pattern}
                )
        ranges.append((lo, hi))


def _class_char(pattern: str, i: int) -> tuple[str, int]:
    """Read one possibly escaped class character. Returns it unescaped with the next index."""
    n = len(pattern)
    if i >= n:
        raise GlobError(f"unterminated character class in glob {pattern!r}", {"pattern": pattern})
    c = pattern[i]
    if c == "\\":
        if i + 1 >= n:
            raise GlobError(f"trailing escape in glob {pattern!r}", {"pattern": pattern})
        return pattern[i + 1], i + 2
    if c in "-]":
        raise GlobError(f"bad character class in glob {pattern!r}", {"pattern": pattern})
    return c, i + 1


def _class_to_gitignore(negated: bool, ranges: list[tuple[str, str]]) -> str:
    """
    Spell a parsed class without escapes: `]` first, `-` last, and `^` or `!`
    never in the leading position.
    """
    singles: dict[str, None] = {}
    spans: list[str] = []
    for lo, hi in ranges:
        while lo < hi and lo in _CLASS_SPECIALS:
            singles[lo] = None
            lo = chr(ord(lo) + 1)
        while lo < hi and hi in _CLASS_SPECIALS:
            singles[hi] = None
            hi = chr(ord(hi) - 1)
        if lo == hi:
            singles[lo] = None
        else:
            spans.append(f"{lo}-{hi}")

    if not negated and not spans and len(singles) == 1:
        # A one-character class is just that character.
        return "\\" + next(iter(singles))

    members = ["]"] if "]" in singles else []
    members += spans
    members += [c for c in singles if c not in _CLASS_SPECIALS]
    members += [c for c in "^!" if c in singles]
    if "-" in singles:
        if members and members[0] in "^!":
            members.insert(0, "-")
        else:
            members.append("-")
    return "[" + ("!" if negated else "") + "".join(members) + "]"


def _to_gitignore_line(pattern: str) -> str:
    """
    Rewrite a shell glob in gitignore syntax, raising `GlobError` if it is
    malformed. Escapes a leading `!` or `#` and trailing spaces.
    """
    out: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == "\\":
            if i + 1 >= n:
                raise GlobError(f"trailing escape in glob {pattern!r}", {"pattern": pattern})
            out.append(pattern[i : i + 2])
            i += 2
        elif c == "[":
            negated, ranges, i = _parse_class(pattern, i + 1)
            out.append(_class_to_gitignore(negated, ranges))
        else:
            out.append(c)
            i += 1

    line = "".join(out)
    if line and line[0] in _GITIGNORE_LEADING:
        line = "\\" + line
    stripped = line.rstrip(" ")
    if len(stripped) < len(line) and not stripped.endswith("\\"):
        line = stripped + "\\ " * (len(line) - len(stripped))
    return line


class Glob:
    """A compiled glob that matches file basenames."""

    def __init__(self, pattern: str) -> None:
        if not isinstance(pattern, str):
            raise GlobError(f"glob must be a string, not {pattern!r}", {"pattern": pattern})
        if not pattern:
            raise GlobError("empty glob pattern", {"pattern": pattern})
        line = _to_gitignore_line(pattern)
        self.pattern: str = pattern
        self._has_separator: bool = "/" in pattern
        try:
            self._spec: pathspec.PathSpec = pathspec.PathSpec.from_lines("gitignore", [line])
        except (ValueError, re.error) as e:
            raise GlobError(f"bad glob {pattern!r}: {e}", {"pattern": pattern}) from e

    def matches(self, name: str) -> bool:
        """Whether the basename `name` matches this glob."""
        if self._has_separator or not name:
            return False
        return self._spec.match_file(name)

    def __repr__(self) -> str:
        return f"Glob({self.pattern!r})"

"""Exclusion filters applied to matched paths."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from depgather.files.globs import Glob

# Names hidden by default.
DOTFILE_GLOB = ".*"


def exclude_matching(paths: Iterable[Path], glob: Glob) -> list[Path]:
    """Drop every path whose basename matches `glob`."""
    return [p for p in paths if not glob.matches(p.name)]


class FilterChain:
    """
    Dot-file exclusion followed by the user's exclusion glob.

    Either stage may be off: dot files are kept when `include_dot_files` is set,
    and an empty `exclude` adds no stage. Patterns are compiled up front, so a
    bad `exclude` raises `GlobError` on construction.
    """

    def __init__(self, include_dot_files: bool = False, exclude: str = "") -> None:
        self.stages: list[Glob] = []
        if not include_dot_files:
            self.stages.append(Glob(DOTFILE_GLOB))
        if exclude:
            self.stages.append(Glob(exclude))

    def apply(self, paths: Iterable[Path]) -> list[Path]:
        result = list(paths)
        for glob in self.stages:
            result = exclude_matching(result, glob)
        return result

"""Rewrite matched paths as absolute or relative to a base directory."""

from __future__ import annotations

import os
from pathlib import Path

from depgather.errors import PathError


def relative_path(base: str, target: str) -> str:
    """
    Express `target` relative to `base`.

    Both must be absolute or both relative; mixing the two, or paths on
    different drives, raises `PathError`.
    """
    if os.path.isabs(base) != os.path.isabs(target):
        raise PathError(
            f"can't make {target} relative to {base}", {"base": base, "path": target}
        )
    try:
        return os.path.relpath(target, base)
    except ValueError as e:
        raise PathError(
            f"can't make {target} relative to {base}: {e}", {"base": base, "path": target}
        ) from e


class PathFormatter:
    """
    Format matched paths for output.

    An empty base leaves paths as matched. The base `.` means the working
    directory at construction time; it is looked up once so every path in a
    run shares the same reference point.
    """

    def __init__(self, base: str | Path = "") -> None:
        base = os.fspath(base)
        self.base: str | None = None
        if base:
            base = os.path.normpath(base)
            if base == ".":
                base = os.getcwd()
            self.base = base

    def __call__(self, path: str | Path) -> str:
        path = os.fspath(path)
        if self.base is None:
            return path
        return relative_path(self.base, path)

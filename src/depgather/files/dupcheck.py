"""Detect files from different directories that share a basename."""

from __future__ import annotations

import os

from depgather.errors import DuplicateError


class DuplicateRegistry:
    """
    Remembers the first path seen for each basename across a whole run.

    When disabled, `check` accepts every path without recording it.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._seen: dict[str, str] = {}

    def check(self, path: str) -> None:
        """Record `path`, or raise `DuplicateError` if its basename was already seen."""
        if not self.enabled:
            return
        name = os.path.basename(path)
        previous = self._seen.get(name)
        if previous is not None:
            raise DuplicateError(name, path, previous)
        self._seen[name] = path

    def __contains__(self, basename: object) -> bool:
        return basename in self._seen

    def __len__(self) -> int:
        return len(self._seen)

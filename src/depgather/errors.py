"""
Errors raised while gathering files.

Every error is fatal to a run: nothing in the pipeline retries or falls back,
so callers either get a complete file list or one of these.
"""

from __future__ import annotations

from typing import Any


class GatherError(Exception):
    """Base exception for all gather failures."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        """
        Args:
            message: Human-readable error message
            context: Optional dict with additional context (paths, patterns, import paths)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ResolutionError(GatherError):
    """An import specifier could not be resolved to packages."""


class ClosureError(GatherError):
    """A dependency could not be loaded while expanding the import closure."""


class GlobError(GatherError):
    """A glob pattern is malformed."""


class PathError(GatherError):
    """A path cannot be expressed relative to the requested base."""


class DuplicateError(GatherError):
    """Two gathered files share a basename."""

    def __init__(self, basename: str, path: str, previous: str):
        super().__init__(
            f"duplicate file {basename} found at\n\t{path}\npreviously\n\t{previous}",
            {"basename": basename, "path": path, "previous": previous},
        )
        self.basename = basename
        self.path = path
        self.previous = previous

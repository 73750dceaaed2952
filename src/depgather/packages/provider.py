"""
Package metadata providers.

A provider turns import paths (or `...` wildcard patterns) into `Package`
descriptors. `GoListProvider` asks the `go` tool; tests supply their own.
"""

from __future__ import annotations

import json
import logging
import subprocess
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from depgather.errors import ResolutionError
from depgather.packages.types import Package

logger = logging.getLogger(__name__)

# cgo's pseudo-package: listed in imports but has no directory of its own.
CGO_PSEUDO_IMPORT = "C"


@runtime_checkable
class PackageProvider(Protocol):
    """Protocol for looking up package metadata."""

    def list_packages(self, patterns: Sequence[str], tags: Sequence[str]) -> list[Package]:
        """
        Resolve import paths or wildcard patterns to packages.

        Args:
            patterns: Import paths, possibly ending in `/...`, or relative directories
            tags: Build tags that decide which conditional imports count

        Returns:
            One descriptor per matched package

        Raises:
            ResolutionError: If any pattern cannot be resolved
        """
        ...


class GoListProvider:
    """
    Resolve packages with `go list -json`.

    The `go` tool handles wildcard expansion, build tags, modules and vendoring;
    this class only runs it and decodes its output.
    """

    def __init__(self, go: str = "go", cwd: Path | None = None) -> None:
        self.go = go
        self.cwd = cwd

    def command(self, patterns: Sequence[str], tags: Sequence[str]) -> list[str]:
        cmd = [self.go, "list", "-json"]
        if tags:
            cmd.append("-tags=" + ",".join(tags))
        cmd.append("--")
        cmd.extend(patterns)
        return cmd

    def list_packages(self, patterns: Sequence[str], tags: Sequence[str]) -> list[Package]:
        cmd = self.command(patterns, tags)
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            proc = subprocess.run(cmd, cwd=self.cwd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise ResolutionError(
                f"could not run {self.go}: {e}", {"command": cmd}
            ) from e

        stderr = proc.stderr.strip()
        if proc.returncode != 0:
            raise ResolutionError(
                stderr or f"{self.go} list exited with status {proc.returncode}",
                {"command": cmd, "returncode": proc.returncode},
            )
        if stderr:
            logger.warning(stderr)

        return [_package_from_json(obj) for obj in iter_json_objects(proc.stdout)]


def iter_json_objects(text: str) -> Iterator[dict[str, Any]]:
    """Decode a stream of concatenated JSON objects, as printed by `go list -json`."""
    decoder = json.JSONDecoder()
    pos = 0
    end = len(text)
    while True:
        while pos < end and text[pos].isspace():
            pos += 1
        if pos >= end:
            return
        try:
            obj, pos = decoder.raw_decode(text, pos)
        except json.JSONDecodeError as e:
            raise ResolutionError(f"could not decode package metadata: {e}") from e
        if not isinstance(obj, dict):
            raise ResolutionError(f"unexpected package metadata: {obj!r}")
        yield obj


def _package_from_json(obj: dict[str, Any]) -> Package:
    import_path = obj.get("ImportPath")
    if not import_path:
        raise ResolutionError(f"package metadata has no import path: {obj!r}")
    directory = obj.get("Dir")
    if not directory:
        raise ResolutionError(
            f"package {import_path} has no directory", {"import_path": import_path}
        )
    imports = tuple(i for i in obj.get("Imports") or [] if i != CGO_PSEUDO_IMPORT)
    return Package(
        import_path=import_path,
        dir=Path(directory),
        imports=imports,
        standard=bool(obj.get("Standard", False)),
    )

"""
Package selection: resolve specifiers, expand the import closure, and drop
standard library packages.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from depgather.errors import ClosureError, ResolutionError
from depgather.packages.provider import PackageProvider
from depgather.packages.types import Package, PackageSet

logger = logging.getLogger(__name__)

# With no specifiers the package in the current directory is used.
DEFAULT_SPECIFIERS: list[str] = ["."]


def resolve_packages(
    provider: PackageProvider, specifiers: Sequence[str], tags: Sequence[str] = ()
) -> PackageSet:
    """
    Resolve import specifiers (including `...` wildcards) to a package set.

    An empty `specifiers` means the current directory. Any unresolvable
    specifier aborts the whole resolution.
    """
    patterns = list(specifiers) or DEFAULT_SPECIFIERS
    packages = PackageSet(provider.list_packages(patterns, tags))
    if not packages:
        logger.warning(f"No packages matched {' '.join(patterns)}")
    logger.debug(f"Resolved {len(packages)} package(s) from {patterns}")
    return packages


def expand_closure(
    provider: PackageProvider, roots: PackageSet, tags: Sequence[str] = ()
) -> PackageSet:
    """
    Return `roots` plus every package reachable through their imports.

    Walks the import graph breadth-first. Each frontier of import paths not yet
    in the closure is loaded with a single provider call, so no import path is
    ever looked up twice. The result lists the roots first, then dependencies
    in the order they were discovered.
    """
    closure = PackageSet(roots)
    frontier = _unseen_imports(closure, list(closure))
    while frontier:
        logger.debug(f"Loading {len(frontier)} dependencies")
        try:
            loaded = PackageSet(provider.list_packages(frontier, tags))
        except ResolutionError as e:
            raise ClosureError(
                f"loading dependencies failed: {e.message}",
                {"import_paths": frontier, **e.context},
            ) from e

        added: list[Package] = []
        for import_path in frontier:
            package = loaded.get(import_path)
            if package is None:
                raise ClosureError(
                    f"dependency {import_path} could not be loaded",
                    {"import_path": import_path},
                )
            if closure.add(package):
                added.append(package)
        frontier = _unseen_imports(closure, added)

    logger.debug(f"Closure of {len(roots)} root(s) has {len(closure)} package(s)")
    return closure


def _unseen_imports(closure: PackageSet, packages: Iterable[Package]) -> list[str]:
    """Imports of `packages` not yet in `closure`, deduplicated, in first-seen order."""
    unseen: dict[str, None] = {}
    for package in packages:
        for import_path in package.imports:
            if import_path not in closure:
                unseen[import_path] = None
    return list(unseen)


def select_stdlib(packages: PackageSet, include_stdlib: bool) -> PackageSet:
    """Drop standard library packages unless `include_stdlib` is set."""
    if include_stdlib:
        return packages
    return packages.without_stdlib()

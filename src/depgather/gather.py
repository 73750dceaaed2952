"""
Gather files across a package dependency closure.

Packages are selected first (resolve, expand, drop stdlib), then each
package directory runs through match, filter, format, and duplicate check.
Paths are yielded one at a time so callers can stream them; an error stops
the run at the point it happens.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from depgather.files import DuplicateRegistry, FilterChain, Glob, PathFormatter, match_directory
from depgather.packages import (
    PackageProvider,
    PackageSet,
    expand_closure,
    resolve_packages,
    select_stdlib,
)

logger = logging.getLogger(__name__)

# Pattern used when no arguments are given at all.
DEFAULT_PATTERN = "*"


@dataclass
class GatherOptions:
    """
    Settings for one gather run.

    `exclude=""` adds no exclusion stage and `rel=""` keeps absolute paths.
    """

    pattern: str = DEFAULT_PATTERN
    tags: list[str] = field(default_factory=list)
    include_stdlib: bool = False
    no_deps: bool = False
    exclude: str = ""
    rel: str = ""
    include_dot_files: bool = False
    fail_on_dup: bool = False


def split_args(args: Sequence[str]) -> tuple[str, list[str]]:
    """
    Split positional arguments into `(pattern, specifiers)`.

    The first argument is the pattern, and only if there is one; with no
    arguments the pattern is `*` and there are no specifiers (so the current
    directory is used).
    """
    if not args:
        return DEFAULT_PATTERN, []
    return args[0], list(args[1:])


def select_packages(
    provider: PackageProvider, specifiers: Sequence[str], options: GatherOptions
) -> PackageSet:
    """Resolve `specifiers`, expand dependencies and drop stdlib packages per `options`."""
    packages = resolve_packages(provider, specifiers, options.tags)
    if not options.no_deps:
        packages = expand_closure(provider, packages, options.tags)
    return select_stdlib(packages, options.include_stdlib)


def gather_files(
    packages: PackageSet,
    options: GatherOptions,
    registry: DuplicateRegistry | None = None,
) -> Iterator[str]:
    """
    Yield formatted paths of matching files in each package directory, in package order.

    Globs and the path base are checked before the first directory is read.
    `registry` defaults to a fresh one enabled by `options.fail_on_dup`.
    """
    glob = Glob(options.pattern)
    filters = FilterChain(include_dot_files=options.include_dot_files, exclude=options.exclude)
    formatter = PathFormatter(options.rel)
    if registry is None:
        registry = DuplicateRegistry(enabled=options.fail_on_dup)

    for package in packages:
        matches = filters.apply(match_directory(package.dir, glob))
        logger.debug(f"{package.import_path}: {len(matches)} file(s) in {package.dir}")
        for match in matches:
            path = formatter(match)
            registry.check(path)
            yield path


def gather(
    specifiers: Sequence[str], provider: PackageProvider, options: GatherOptions
) -> Iterator[str]:
    """Select packages for `specifiers` and yield every gathered file path."""
    packages = select_packages(provider, specifiers, options)
    yield from gather_files(packages, options)

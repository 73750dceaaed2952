"""Package descriptors and ordered, import-path-keyed package sets."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Package:
    """
    One resolved package: its import path, the directory its files live in,
    its direct imports, and whether it ships with the standard distribution.
    """

    import_path: str
    dir: Path
    imports: tuple[str, ...] = ()
    standard: bool = False


class PackageSet:
    """
    Packages keyed by import path, iterated in insertion order.

    Adding a package whose import path is already present keeps the first one,
    so a set never holds two descriptors for the same import path.
    """

    def __init__(self, packages: Iterable[Package] = ()) -> None:
        self._packages: dict[str, Package] = {}
        self.update(packages)

    def add(self, package: Package) -> bool:
        """Add `package` unless its import path is present. Returns whether it was added."""
        if package.import_path in self._packages:
            return False
        self._packages[package.import_path] = package
        return True

    def update(self, packages: Iterable[Package]) -> None:
        for package in packages:
            self.add(package)

    def without_stdlib(self) -> PackageSet:
        """New set with every standard library package removed."""
        return PackageSet(p for p in self if not p.standard)

    def import_paths(self) -> list[str]:
        return list(self._packages)

    def get(self, import_path: str) -> Package | None:
        return self._packages.get(import_path)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Package):
            return item.import_path in self._packages
        return item in self._packages

    def __iter__(self) -> Iterator[Package]:
        return iter(self._packages.values())

    def __len__(self) -> int:
        return len(self._packages)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackageSet):
            return NotImplemented
        return self._packages == other._packages

    def __repr__(self) -> str:
        return f"PackageSet({self.import_paths()!r})"

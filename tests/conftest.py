"""Shared fixtures: an in-memory package provider and a small package tree."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

import pytest

from depgather.errors import ResolutionError
from depgather.packages import Package


class FakeProvider:
    """
    Serves packages from memory. `.` resolves to `current`, and `path/...`
    matches `path` and everything below it.
    """

    def __init__(self, packages: Iterable[Package], current: str | None = None) -> None:
        self.packages: dict[str, Package] = {p.import_path: p for p in packages}
        self.current = current
        self.calls: list[tuple[list[str], list[str]]] = []

    def list_packages(self, patterns: Sequence[str], tags: Sequence[str]) -> list[Package]:
        self.calls.append((list(patterns), list(tags)))
        result: list[Package] = []
        for pattern in patterns:
            if pattern == "." and self.current is not None:
                pattern = self.current
            if pattern.endswith("/..."):
                prefix = pattern[: -len("/...")]
                result.extend(
                    p
                    for path, p in self.packages.items()
                    if path == prefix or path.startswith(prefix + "/")
                )
            elif pattern in self.packages:
                result.append(self.packages[pattern])
            else:
                raise ResolutionError(f"cannot find package {pattern!r}")
        return result

    @property
    def requested(self) -> list[str]:
        """Every import path or pattern asked for, in order."""
        return [pattern for patterns, _ in self.calls for pattern in patterns]


def make_package(
    import_path: str, directory: Path, imports: Iterable[str] = (), standard: bool = False
) -> Package:
    directory.mkdir(parents=True, exist_ok=True)
    return Package(import_path, directory, tuple(imports), standard)


@dataclass
class PQTree:
    provider: FakeProvider
    p_dir: Path
    q_dir: Path
    fmt_dir: Path


@pytest.fixture
def pq_tree(tmp_path: Path) -> PQTree:
    """
    Package P imports Q and the stdlib package fmt.
    P holds a.css and .hidden.css; Q holds a.css and b.css; fmt holds z.css.
    """
    p_dir = tmp_path / "src" / "p"
    q_dir = tmp_path / "src" / "q"
    fmt_dir = tmp_path / "goroot" / "fmt"
    packages = [
        make_package("example.com/p", p_dir, ["example.com/q", "fmt"]),
        make_package("example.com/q", q_dir),
        make_package("fmt", fmt_dir, standard=True),
    ]
    (p_dir / "a.css").write_text("p a\n")
    (p_dir / ".hidden.css").write_text("p hidden\n")
    (p_dir / "main.go").write_text("package p\n")
    (q_dir / "a.css").write_text("q a\n")
    (q_dir / "b.css").write_text("q b\n")
    (fmt_dir / "z.css").write_text("fmt z\n")
    return PQTree(FakeProvider(packages, current="example.com/p"), p_dir, q_dir, fmt_dir)

"""End-to-end tests of package selection and the file pipeline."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from conftest import PQTree

from depgather import (
    DuplicateError,
    GatherOptions,
    GlobError,
    PathError,
    gather,
    gather_files,
    select_packages,
    split_args,
)
from depgather.files import DuplicateRegistry


def test_split_args_no_arguments():
    assert split_args([]) == ("*", [])


def test_split_args_pattern_only():
    assert split_args(["*.css"]) == ("*.css", [])


def test_split_args_pattern_then_specifiers():
    assert split_args(["*.go", "a/b", "c/..."]) == ("*.go", ["a/b", "c/..."])


def test_select_packages_default(pq_tree: PQTree):
    packages = select_packages(pq_tree.provider, ["example.com/p"], GatherOptions())
    assert packages.import_paths() == ["example.com/p", "example.com/q"]


def test_select_packages_with_stdlib(pq_tree: PQTree):
    packages = select_packages(
        pq_tree.provider, ["example.com/p"], GatherOptions(include_stdlib=True)
    )
    assert packages.import_paths() == ["example.com/p", "example.com/q", "fmt"]


def test_select_packages_no_deps(pq_tree: PQTree):
    packages = select_packages(pq_tree.provider, ["example.com/p"], GatherOptions(no_deps=True))
    assert packages.import_paths() == ["example.com/p"]
    assert pq_tree.provider.requested == ["example.com/p"]


def test_duplicates_fail_after_earlier_output(pq_tree: PQTree):
    options = GatherOptions(pattern="*.css", fail_on_dup=True)
    emitted: list[str] = []
    with pytest.raises(DuplicateError) as exc:
        for path in gather(["example.com/p"], pq_tree.provider, options):
            emitted.append(path)
    assert exc.value.basename == "a.css"
    assert exc.value.previous == str(pq_tree.p_dir / "a.css")
    assert exc.value.path == str(pq_tree.q_dir / "a.css")
    assert emitted == [str(pq_tree.p_dir / "a.css")]


def test_duplicates_allowed_by_default(pq_tree: PQTree):
    options = GatherOptions(pattern="*.css")
    result = list(gather(["example.com/p"], pq_tree.provider, options))
    assert result == [
        str(pq_tree.p_dir / "a.css"),
        str(pq_tree.q_dir / "a.css"),
        str(pq_tree.q_dir / "b.css"),
    ]


def test_no_deps_only_scans_roots(pq_tree: PQTree):
    options = GatherOptions(pattern="*.css", no_deps=True)
    result = list(gather(["example.com/p"], pq_tree.provider, options))
    assert result == [str(pq_tree.p_dir / "a.css")]


def test_default_pattern_and_current_package(pq_tree: PQTree):
    pattern, specifiers = split_args([])
    options = GatherOptions(pattern=pattern, no_deps=True)
    result = list(gather(specifiers, pq_tree.provider, options))
    assert result == [str(pq_tree.p_dir / "a.css"), str(pq_tree.p_dir / "main.go")]


def test_dot_files_included(pq_tree: PQTree):
    options = GatherOptions(pattern="*.css", no_deps=True, include_dot_files=True)
    result = list(gather(["example.com/p"], pq_tree.provider, options))
    assert result == [str(pq_tree.p_dir / ".hidden.css"), str(pq_tree.p_dir / "a.css")]


def test_stdlib_files_included(pq_tree: PQTree):
    options = GatherOptions(pattern="*.css", include_stdlib=True, exclude="a.*")
    result = list(gather(["example.com/p"], pq_tree.provider, options))
    assert result == [str(pq_tree.q_dir / "b.css"), str(pq_tree.fmt_dir / "z.css")]


def test_relative_output(pq_tree: PQTree):
    base = pq_tree.p_dir.parent
    options = GatherOptions(pattern="*.css", rel=str(base))
    result = list(gather(["example.com/p"], pq_tree.provider, options))
    assert result == [
        os.path.join("p", "a.css"),
        os.path.join("q", "a.css"),
        os.path.join("q", "b.css"),
    ]


def test_duplicates_checked_on_formatted_paths(pq_tree: PQTree):
    options = GatherOptions(pattern="*.css", rel=str(pq_tree.p_dir.parent), fail_on_dup=True)
    with pytest.raises(DuplicateError) as exc:
        list(gather(["example.com/p"], pq_tree.provider, options))
    assert exc.value.previous == os.path.join("p", "a.css")


def test_bad_pattern_fails_before_output(pq_tree: PQTree):
    with pytest.raises(GlobError):
        list(gather(["example.com/p"], pq_tree.provider, GatherOptions(pattern="[css")))


def test_bad_exclude_fails(pq_tree: PQTree):
    with pytest.raises(GlobError):
        list(gather(["example.com/p"], pq_tree.provider, GatherOptions(exclude="a[")))


def test_relative_base_mismatch_fails(pq_tree: PQTree):
    options = GatherOptions(pattern="*.css", rel="not/absolute")
    with pytest.raises(PathError):
        list(gather(["example.com/p"], pq_tree.provider, options))


def test_vanished_directory_yields_nothing(pq_tree: PQTree, tmp_path: Path):
    for child in pq_tree.q_dir.iterdir():
        child.unlink()
    pq_tree.q_dir.rmdir()
    options = GatherOptions(pattern="*.css")
    result = list(gather(["example.com/p"], pq_tree.provider, options))
    assert result == [str(pq_tree.p_dir / "a.css")]


def test_shared_registry_spans_calls(pq_tree: PQTree):
    options = GatherOptions(pattern="*.css", no_deps=True)
    registry = DuplicateRegistry()
    p_only = select_packages(pq_tree.provider, ["example.com/p"], options)
    q_only = select_packages(pq_tree.provider, ["example.com/q"], options)
    assert list(gather_files(p_only, options, registry)) == [str(pq_tree.p_dir / "a.css")]
    with pytest.raises(DuplicateError):
        list(gather_files(q_only, options, registry))

"""
depgather: gather files matching a glob across a package's dependency closure.

Usage::

    from depgather import GatherOptions, GoListProvider, gather

    options = GatherOptions(pattern="*.css", fail_on_dup=True)
    for path in gather(["example.com/app"], GoListProvider(), options):
        print(path)
"""

from depgather.errors import (
    ClosureError,
    DuplicateError,
    GatherError,
    GlobError,
    PathError,
    ResolutionError,
)
from depgather.gather import GatherOptions, gather, gather_files, select_packages, split_args
from depgather.packages import GoListProvider, Package, PackageProvider, PackageSet

__all__ = [
    "ClosureError",
    "DuplicateError",
    "GatherError",
    "GatherOptions",
    "GlobError",
    "GoListProvider",
    "Package",
    "PackageProvider",
    "PackageSet",
    "PathError",
    "ResolutionError",
    "gather",
    "gather_files",
    "select_packages",
    "split_args",
]

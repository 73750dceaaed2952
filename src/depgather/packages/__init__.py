"""Package descriptors, metadata providers, and dependency closure."""

from depgather.packages.provider import GoListProvider, PackageProvider, iter_json_objects
from depgather.packages.resolve import expand_closure, resolve_packages, select_stdlib
from depgather.packages.types import Package, PackageSet

__all__ = [
    "GoListProvider",
    "Package",
    "PackageProvider",
    "PackageSet",
    "expand_closure",
    "iter_json_objects",
    "resolve_packages",
    "select_stdlib",
]

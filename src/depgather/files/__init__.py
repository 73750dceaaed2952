"""
File selection within a single package directory: glob matching, exclusion
filters, path formatting, and cross-directory duplicate detection.
"""

from depgather.files.dupcheck import DuplicateRegistry
from depgather.files.filters import DOTFILE_GLOB, FilterChain, exclude_matching
from depgather.files.globs import Glob, check_glob_syntax
from depgather.files.matcher import match_directory
from depgather.files.paths import PathFormatter, relative_path

__all__ = [
    "DOTFILE_GLOB",
    "DuplicateRegistry",
    "FilterChain",
    "Glob",
    "PathFormatter",
    "check_glob_syntax",
    "exclude_matching",
    "match_directory",
    "relative_path",
]

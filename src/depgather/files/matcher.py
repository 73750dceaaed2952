"""Match a glob against the entries of one directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from depgather.files.globs import Glob

logger = logging.getLogger(__name__)


def match_directory(directory: str | Path, glob: Glob) -> list[Path]:
    """
    Return the entries directly inside `directory` whose names match `glob`,
    sorted by name.

    Not recursive. A directory that is missing or unreadable yields no matches;
    packages can disappear between resolution and scanning.
    """
    directory = Path(directory)
    try:
        names = os.listdir(directory)
    except FileNotFoundError:
        logger.warning(f"Package directory not found, skipping: {directory}")
        return []
    except OSError as e:
        logger.warning(f"Could not list {directory}, skipping: {e}")
        return []

    return [directory / name for name in sorted(names) if glob.matches(name)]

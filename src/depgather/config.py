"""
Config file defaults for gather.

The nearest `.gather.toml`, `gather.toml`, or `pyproject.toml` with a
`[tool.gather]` table, looking upward from the working directory, supplies
defaults for any option not given on the command line.

Keys are the long flag names (`no-deps`, `fail-on-dup`, ...). They may sit at
the top level or inside any one-level table such as `[packages]` or `[output]`.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

CONFIG_FILENAMES = (".gather.toml", "gather.toml", "pyproject.toml")


@dataclass
class GatherConfig:
    """Option defaults read from a config file. `None` means not configured."""

    tags: list[str] | None = None
    stdlib: bool | None = None
    no_deps: bool | None = None
    go: str | None = None
    exclude: str | None = None
    dot: bool | None = None
    fail_on_dup: bool | None = None
    rel: str | None = None
    print0: bool | None = None

    def settings(self) -> dict[str, Any]:
        """The configured options only, keyed by option name."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        return {name: value for name, value in values.items() if value is not None}


def split_tags(values: list[str]) -> list[str]:
    """Split comma- or space-separated build tag lists, dropping empties."""
    tags: list[str] = []
    for value in values:
        tags.extend(value.replace(",", " ").split())
    return tags


def _flag(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, not {value!r}")
    return value


def _text(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string, not {value!r}")
    return value


def _tag_list(key: str, value: Any) -> list[str]:
    if isinstance(value, str):
        return split_tags([value])
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return split_tags(value)
    raise ValueError(f"{key} must be a string or a list of strings, not {value!r}")


# Option name -> checker that returns the value in the option's type.
_CHECKERS: dict[str, Callable[[str, Any], Any]] = {
    "tags": _tag_list,
    "stdlib": _flag,
    "no_deps": _flag,
    "go": _text,
    "exclude": _text,
    "dot": _flag,
    "fail_on_dup": _flag,
    "rel": _text,
    "print0": _flag,
}


def _gather_table(pyproject: Path) -> dict[str, Any] | None:
    """The `[tool.gather]` table of a pyproject.toml, or `None` if it has none."""
    try:
        data = tomllib.loads(pyproject.read_text())
    except (tomllib.TOMLDecodeError, OSError):
        return None
    table = data.get("tool", {}).get("gather")
    return table if isinstance(table, dict) else None


def find_config_file(start_dir: Path) -> Path | None:
    """The nearest config file at or above `start_dir`, or `None`."""
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        for filename in CONFIG_FILENAMES:
            candidate = directory / filename
            if not candidate.is_file():
                continue
            if filename != "pyproject.toml" or _gather_table(candidate) is not None:
                return candidate
    return None


def load_config(config_path: Path) -> GatherConfig:
    """
    Read and check a config file.

    Raises:
        ValueError: If the file is not valid TOML or a value has the wrong type
    """
    data = tomllib.loads(config_path.read_text())
    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("gather", {})
    return parse_config(data)


def _entries(data: dict[str, Any]) -> Iterator[tuple[str, Any]]:
    """Top-level keys, with one level of tables flattened into them."""
    for key, value in data.items():
        if isinstance(value, dict):
            yield from value.items()
        else:
            yield key, value


def parse_config(data: dict[str, Any]) -> GatherConfig:
    """Build a `GatherConfig` from TOML data, ignoring unknown keys."""
    values: dict[str, Any] = {}
    for key, value in _entries(data):
        name = key.replace("-", "_")
        checker = _CHECKERS.get(name)
        if checker is not None:
            values[name] = checker(key, value)
    return GatherConfig(**values)


_T = TypeVar("_T")


def apply_config(options: _T, config: GatherConfig | None, explicit_flags: set[str]) -> _T:
    """Fill `options` from `config`, leaving flags given on the command line alone."""
    if config is None:
        return options
    for name, value in config.settings().items():
        if name not in explicit_flags and hasattr(options, name):
            setattr(options, name, value)
    return options

#!/usr/bin/env python3
"""
gather: list files matching a glob in Go packages and all their dependencies

Usage:
  gather [flags] [pattern [import-path ...]]

The pattern defaults to "*"; to name import paths you must first name the
pattern. With no import paths the package in the current directory is used.
Import paths follow the go tool, including the "..." wildcard.

Examples:
  gather --rel=$GOPATH
  gather -. --fail-on-dup --rel=. "*.css"
  gather --exclude "doc*.go" --stdlib "*.go" some/package
  gather -. --no-deps ".git*" a/b/c d/e/f g/h/...

Defaults can be set in .gather.toml, gather.toml, or [tool.gather] in pyproject.toml.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from depgather.config import apply_config, find_config_file, load_config, split_tags
from depgather.errors import GatherError
from depgather.gather import GatherOptions, gather, split_args
from depgather.packages import GoListProvider

logger = logging.getLogger(__name__)


@dataclass
class Options:
    """Command-line options for the gather tool."""

    args: list[str]
    tags: list[str]
    stdlib: bool
    no_deps: bool
    go: str
    exclude: str
    dot: bool
    fail_on_dup: bool
    rel: str
    print0: bool
    verbose: bool
    version: bool


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` tracks
    which flags the user explicitly passed (for config merge precedence).
    """
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="gather",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "args",
        nargs="*",
        type=str,
        default=[],
        metavar="ARG",
        help="A glob to match file names (default: *), then import paths (default: .)",
    )
    parser.add_argument(
        "--tags",
        action="append",
        default=[],
        metavar="TAGS",
        help="Comma- or space-separated build tags, as for the go tool. Can be repeated",
    )
    parser.add_argument(
        "--stdlib",
        action="store_true",
        help="Include standard library packages in the search",
    )
    parser.add_argument(
        "--no-deps",
        action="store_true",
        dest="no_deps",
        help="Do not search dependencies of the specified packages",
    )
    parser.add_argument(
        "--go",
        type=str,
        default="go",
        metavar="PATH",
        help="go executable used to list packages (default: %(default)s)",
    )
    parser.add_argument(
        "--exclude",
        type=str,
        default="",
        metavar="GLOB",
        help="Glob of file names to exclude",
    )
    parser.add_argument(
        "-.",
        "--dot",
        action="store_true",
        dest="dot",
        help="Include dot files",
    )
    parser.add_argument(
        "--fail-on-dup",
        action="store_true",
        dest="fail_on_dup",
        help="Fail if two files have the same name",
    )
    parser.add_argument(
        "--rel",
        type=str,
        default="",
        metavar="DIR",
        help="Print all results relative to DIR ('.' for the current directory)",
    )
    parser.add_argument(
        "--print0",
        action="store_true",
        help="Separate file names by NUL instead of newline",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log package resolution and matching details to stderr",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    # Re-parse with sentinel defaults to detect which flags were actually supplied,
    # since comparing against defaults fails when the user passes the default.
    _SENTINEL = object()
    sentinel_parser = argparse.ArgumentParser(add_help=False)
    sentinel_parser.add_argument("--tags", action="append", default=None)
    sentinel_parser.add_argument("--stdlib", action="store_true", default=_SENTINEL)
    sentinel_parser.add_argument("--no-deps", dest="no_deps", action="store_true", default=_SENTINEL)
    sentinel_parser.add_argument("--go", default=_SENTINEL)
    sentinel_parser.add_argument("--exclude", default=_SENTINEL)
    sentinel_parser.add_argument("-.", "--dot", dest="dot", action="store_true", default=_SENTINEL)
    sentinel_parser.add_argument(
        "--fail-on-dup", dest="fail_on_dup", action="store_true", default=_SENTINEL
    )
    sentinel_parser.add_argument("--rel", default=_SENTINEL)
    sentinel_parser.add_argument("--print0", action="store_true", default=_SENTINEL)
    sentinel_opts, _ = sentinel_parser.parse_known_args(args if args is not None else sys.argv[1:])

    explicit_flags: set[str] = set()
    for name in ("tags", "stdlib", "no_deps", "go", "exclude", "dot", "fail_on_dup", "rel", "print0"):
        val = getattr(sentinel_opts, name, _SENTINEL)
        # For append actions, None means not supplied; a list means supplied
        if name == "tags":
            if val is not None:
                explicit_flags.add(name)
        elif val is not _SENTINEL:
            explicit_flags.add(name)

    return (
        Options(
            args=opts.args,
            tags=split_tags(opts.tags),
            stdlib=opts.stdlib,
            no_deps=opts.no_deps,
            go=opts.go,
            exclude=opts.exclude,
            dot=opts.dot,
            fail_on_dup=opts.fail_on_dup,
            rel=opts.rel,
            print0=opts.print0,
            verbose=opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="gather: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the gather CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options, explicit_flags = _parse_args(args)
    _configure_logging(options.verbose)

    if options.version:
        try:
            version = importlib.metadata.version("depgather")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    # Load and merge config file settings
    config_path = find_config_file(Path.cwd())
    if config_path:
        logger.debug(f"Using config file {config_path}")
        try:
            config = load_config(config_path)
        except ValueError as e:
            print(f"Error: invalid config file {config_path}: {e}", file=sys.stderr)
            return 1
        apply_config(options, config, explicit_flags)

    pattern, specifiers = split_args(options.args)
    gather_options = GatherOptions(
        pattern=pattern,
        tags=options.tags,
        include_stdlib=options.stdlib,
        no_deps=options.no_deps,
        exclude=options.exclude,
        rel=options.rel,
        include_dot_files=options.dot,
        fail_on_dup=options.fail_on_dup,
    )
    provider = GoListProvider(go=options.go)
    separator = b"\0" if options.print0 else b"\n"

    # Paths are written as the raw bytes the filesystem returned, so names
    # that are not valid in the locale encoding still come out intact.
    sys.stdout.flush()
    out = sys.stdout.buffer
    try:
        # Each record goes out as soon as it is found; a later failure leaves
        # the records already written in place.
        for path in gather(specifiers, provider, gather_options):
            out.write(os.fsencode(path) + separator)
    except GatherError as e:
        out.flush()
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    out.flush()

    return 0


if __name__ == "__main__":
    sys.exit(main())

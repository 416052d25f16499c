"""CLI entry point for dotfind — I/O boundary only."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Callable

from dotfind import DotfindError, __version__
from dotfind.config import resolve_config
from dotfind.scanner import Diagnostics, execute
from dotfind.search import SearchSpec

PATTERN_HELP = """\
arguments:
  f=PATTERN   file name must match PATTERN
  p=PATTERN   path must match PATTERN
  c=PATTERN   content must contain PATTERN
  nf=, np=, nc=  negated forms of the above
  anything else is a path to search (default: current directory)

A pattern is a set of literals separated by two dots "..", like
..foo..bar.. or foo..bar. Any text may appear where ".." stands.

File name and path patterns match the whole name or path. Content patterns
match any part of the content (".." is implied at both ends). In content a gap may
span several lines.

Names and paths are matched case-insensitively; write their patterns in
lower case. Content is case sensitive unless -i is given.

examples:
  dotfind src f=..test..           files under src with "test" in the name
  dotfind p=..src.. nf=..vendor..  files below a src directory, vendor names excluded
  dotfind -i c=todo..fix           files mentioning "todo", later "fix"
"""


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``dotfind`` command.
    """
    parser = argparse.ArgumentParser(
        prog="dotfind",
        description="find files by name, path and content with dot patterns",
        epilog=PATTERN_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "args",
        nargs="*",
        metavar="PATH|FILTER",
        help="Paths to search and f=/p=/c= filters (see below)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose debug output on stderr",
    )
    parser.add_argument(
        "-i",
        "--ignore-case",
        action="store_true",
        dest="content_case_insensitive",
        help="Case insensitive content matches (slower)",
    )
    parser.add_argument(
        "-L",
        "--follow",
        action="store_true",
        dest="follow_symlinks",
        help="Follow symbolic links to directories",
    )
    parser.add_argument(
        "--gitignore",
        action="store_true",
        help="Leave out entries ignored by a .gitignore at the search root",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML file with exclude_names/exclude_paths lists "
        "(default: $DOTFIND_CONFIG or ~/.config/dotfind/config.yaml)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _build_spec(args: argparse.Namespace, diagnostics: Diagnostics) -> SearchSpec:
    """Combine CLI arguments and configuration file into a search spec.

    Raises:
        DotfindError: On invalid patterns or configuration.
    """
    config = resolve_config(args.config)
    spec = SearchSpec.from_args(
        args.args,
        content_case_insensitive=args.content_case_insensitive,
        follow_symlinks=args.follow_symlinks,
        gitignore=args.gitignore,
        exclude_names=config.exclude_names,
        exclude_paths=config.exclude_paths,
        diagnostics=diagnostics,
    )
    diagnostics.debug("search: %s", spec)
    return spec


def _run_with_args(
    args: argparse.Namespace,
    write_line: Callable[[str], None],
    diagnostics: Diagnostics,
) -> None:
    """Run the search and hand every matching file path to *write_line*.

    Raises:
        DotfindError: On any fatal, user-facing error.
    """
    spec = _build_spec(args, diagnostics)

    def on_accept(path: str, is_dir: bool) -> None:
        diagnostics.debug("matched: %s, dir=%s", path, is_dir)
        if not is_dir:
            write_line(path)

    execute(spec, on_accept, diagnostics)


def run_dotfind(argv: list[str] | None = None) -> list[str]:
    """Run dotfind with provided CLI args and return the reported paths.

    This function does not write to stdout and is the primary test
    target for CLI behavior.

    Args:
        argv: Command-line argument list without program name.

    Returns:
        list[str]: Matching file paths in discovery order.

    Raises:
        DotfindError: On any user-facing validation error.
    """
    args = build_parser().parse_intermixed_args(argv)
    lines: list[str] = []
    _run_with_args(args, lines.append, Diagnostics(verbose=args.verbose))
    return lines


def _write_stdout(line: str) -> None:
    # Paths are printed as their raw bytes, whatever their encoding.
    sys.stdout.buffer.write(os.fsencode(line) + b"\n")


def main() -> None:
    """Run the CLI entry point with process arguments.

    Streams matches to stdout as they are found. Exits with code 1 on
    user-facing errors.
    """
    args = build_parser().parse_intermixed_args()
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
    )

    try:
        _run_with_args(args, _write_stdout, Diagnostics(verbose=args.verbose))
    except DotfindError as exc:
        sys.stderr.write(f"dotfind: {exc}\n")
        sys.exit(1)
    except BrokenPipeError:
        # stdout closed early, e.g. piped into head
        sys.stderr.close()
        sys.exit(0)

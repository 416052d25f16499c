"""Traversal engine: explicit-stack DFS that reports entries passing the filters."""

from __future__ import annotations

import logging
import os
import stat
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dotfind import RootTraversalError
from dotfind.gitignore import RootIgnore, load_root_ignore

if TYPE_CHECKING:
    from dotfind.search import SearchSpec

OnAccept = Callable[[str, bool], None]

_SEPARATORS = tuple(sep for sep in (os.sep, os.altsep) if sep)


@dataclass(frozen=True, slots=True)
class EntryAccessError:
    """A filesystem entry that could not be stat-ed, listed or read.

    Attributes:
        path: Entry path as walked.
        reason: Human-readable failure description.
    """

    path: str
    reason: str


@dataclass
class Diagnostics:
    """Diagnostics collaborator passed to the compiler and the engine.

    Attributes:
        logger: Destination for leveled messages.
        verbose: Whether debug messages are emitted.
        errors: Recoverable per-entry errors, in encounter order.
    """

    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("dotfind"))
    verbose: bool = False
    errors: list[EntryAccessError] = field(default_factory=list)

    def debug(self, msg: str, *args: object) -> None:
        if self.verbose:
            self.logger.debug(msg, *args)

    def entry_error(self, path: str, exc: BaseException) -> None:
        """Record a per-entry failure and keep going."""
        self.errors.append(EntryAccessError(path=path, reason=str(exc)))
        self.logger.info("error for %s: %s", path, exc)


def _canonical(path: str, follow_symlinks: bool) -> str:
    """Return the path used to detect repeated visits.

    Without symlink following, the final component is kept as is so that a
    link and its target count as two distinct entries.
    """
    if follow_symlinks:
        return os.path.realpath(path)
    absolute = os.path.abspath(path)
    parent, name = os.path.split(absolute)
    return os.path.join(os.path.realpath(parent), name)


def _check_roots(roots: tuple[str, ...]) -> None:
    for root in roots:
        try:
            os.stat(root)
        except OSError as exc:
            raise RootTraversalError(f"cannot search '{root}': {exc.strerror or exc}") from exc


def _read_text(path: str) -> str:
    with open(path, encoding="utf-8") as fh:
        return fh.read()


class _Walk:
    """State of one ``execute`` call."""

    def __init__(
        self,
        spec: SearchSpec,
        on_accept: OnAccept,
        diagnostics: Diagnostics,
        cancel: threading.Event | None,
    ) -> None:
        self.spec = spec
        self.on_accept = on_accept
        self.diag = diagnostics
        self.cancel = cancel
        self.visited: set[str] = set()

    def run(self, root: str) -> None:
        self.diag.debug("walk starting at: %s", root)
        ignore = load_root_ignore(root) if self.spec.gitignore else None
        # A trailing separator makes the OS resolve a root that is a link.
        follow_root = self.spec.follow_symlinks or root.endswith(_SEPARATORS)
        stack: list[tuple[str, bool]] = [(os.path.normpath(root), follow_root)]

        while stack:
            if self.cancel is not None and self.cancel.is_set():
                self.diag.debug("walk cancelled")
                return
            path, follow = stack.pop()

            canonical = _canonical(path, follow)
            if canonical in self.visited:
                self.diag.debug("walk: already visited: %s", path)
                continue
            self.visited.add(canonical)
            self.diag.debug("walk: %s", path)

            try:
                st = os.stat(path) if follow else os.lstat(path)
            except OSError as exc:
                self.diag.entry_error(path, exc)
                continue
            is_dir = stat.S_ISDIR(st.st_mode)

            if self._accepts(path, is_dir, ignore):
                self.on_accept(path, is_dir)

            # filters only decide what is reported, never what is walked
            if is_dir:
                follow_children = self.spec.follow_symlinks
                stack.extend((child, follow_children) for child in reversed(self._children(path)))

    def _children(self, path: str) -> list[str]:
        try:
            names = sorted(os.listdir(path))
        except OSError as exc:
            self.diag.entry_error(path, exc)
            return []
        if path == os.curdir:
            return names
        return [os.path.join(path, name) for name in names]

    def _accepts(
        self,
        path: str,
        is_dir: bool,
        ignore: RootIgnore | None,
    ) -> bool:
        # Lowercasing the subject is cheaper than case-insensitive regexes.
        path_lower = path.lower()
        rejecting = self.spec.path_filters.first_rejecting(path_lower)
        if rejecting is not None:
            self.diag.debug("skip path %s because does not match %s", path, rejecting)
            return False

        if ignore is not None and ignore.ignores(path, is_dir):
            self.diag.debug("skip %s because it is gitignored", path)
            return False

        # directories are exempt from name and content filters
        if is_dir:
            return True

        name_lower = os.path.basename(path_lower)
        rejecting = self.spec.file_filters.first_rejecting(name_lower)
        if rejecting is not None:
            self.diag.debug("skip file %s because does not match %s", name_lower, rejecting)
            return False

        if not self.spec.content_filters:
            return True

        try:
            content = _read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            self.diag.entry_error(path, exc)
            return False
        if self.spec.content_case_insensitive:
            content = content.lower()
        rejecting = self.spec.content_filters.first_rejecting(content)
        if rejecting is not None:
            self.diag.debug("skip content of %s because does not match %s", path, rejecting)
            return False
        return True


def execute(
    spec: SearchSpec,
    on_accept: OnAccept,
    diagnostics: Diagnostics | None = None,
    cancel: threading.Event | None = None,
) -> None:
    """Walk every root of *spec* and report accepted entries.

    Each entry is visited at most once per call, even when reachable from
    several roots or through symbolic links. Directories are always
    descended into; the filters only decide whether an entry is reported.

    Args:
        spec: Roots and filters.
        on_accept: Called with ``(path, is_dir)`` for each accepted entry,
            as soon as it is found.
        diagnostics: Receives debug messages and per-entry errors.
        cancel: Optional event; the walk stops before the next entry once
            it is set.

    Raises:
        RootTraversalError: If a root does not exist or cannot be stat-ed.
            All roots are checked before anything is reported.
    """
    diag = diagnostics or Diagnostics()
    _check_roots(spec.roots)
    walk = _Walk(spec, on_accept, diag, cancel)
    for root in spec.roots:
        walk.run(root)

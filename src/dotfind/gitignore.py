"""``.gitignore`` support for search roots, via pathspec."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from pathspec import GitIgnoreSpec

logger = logging.getLogger(__name__)

GITIGNORE_NAME = ".gitignore"


def load_gitignore_spec(root: str | os.PathLike[str]) -> GitIgnoreSpec | None:
    """Load the ignore rules stored directly in a search root.

    Only ``<root>/.gitignore`` is read; nested ignore files are not
    consulted.

    Args:
        root: Search root directory.

    Returns:
        The compiled rules, or ``None`` when the root has no readable
        ``.gitignore``.
    """
    gitignore_path = Path(root) / GITIGNORE_NAME
    try:
        lines = gitignore_path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError):
        logger.debug("no usable %s in %s", GITIGNORE_NAME, root)
        return None
    logger.debug("loaded %d ignore rules from %s", len(lines), gitignore_path)
    return GitIgnoreSpec.from_lines(lines)


@dataclass(frozen=True, slots=True)
class RootIgnore:
    """Ignore rules bound to the root argument they were loaded from.

    Attributes:
        root: Root argument as given on the command line.
        spec: Rules from ``<root>/.gitignore``.
    """

    root: str
    spec: GitIgnoreSpec

    def ignores(self, path: str, is_dir: bool) -> bool:
        """Return whether a walked *path* below the root is ignored.

        Paths are matched relative to the root with ``/`` separators;
        directories get a trailing ``/`` so that ``build/`` rules apply to
        them. The root itself is never ignored.
        """
        relative = os.path.relpath(path, self.root)
        if relative == os.curdir:
            return False
        relative = Path(relative).as_posix()
        return self.spec.match_file(relative + "/" if is_dir else relative)


def load_root_ignore(root: str) -> RootIgnore | None:
    """Load the rules of *root* when it is a directory with a ``.gitignore``.

    A root that is a file, or a link to one, has no rules.
    """
    if not os.path.isdir(root):
        return None
    spec = load_gitignore_spec(root)
    if spec is None:
        return None
    return RootIgnore(root=root, spec=spec)

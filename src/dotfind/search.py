"""Search settings: roots plus name, path and content filter sets."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from dotfind import FilterPrefixError
from dotfind.filter import FilterSet, Matcher, Negative, Positive
from dotfind.pattern import MatchMode, compile_pattern

if TYPE_CHECKING:
    from dotfind.scanner import Diagnostics

FILE_PREFIX: Final = "f="
PATH_PREFIX: Final = "p="
CONTENT_PREFIX: Final = "c="
NEGATION_MARKER: Final = "n"

DEFAULT_ROOT: Final = "."


def filter_from_arg(
    arg: str,
    prefix: str,
    mode: MatchMode,
    lowercase: bool,
    diagnostics: Diagnostics | None = None,
) -> Matcher:
    """Compile a prefixed filter argument such as ``f=..test..``.

    A leading ``n`` before the prefix (``nf=``, ``np=``, ``nc=``) yields a
    negative matcher.

    Args:
        arg: Raw command-line argument.
        prefix: Expected prefix, e.g. ``FILE_PREFIX``.
        mode: Matching mode for the pattern.
        lowercase: Whether to lowercase the pattern source.
        diagnostics: Optional diagnostics collaborator.

    Returns:
        Matcher: Positive or negative matcher.

    Raises:
        FilterPrefixError: If ``arg`` does not carry ``prefix``.
        InvalidPatternError: If the pattern does not compile.
    """
    negative = arg.startswith(NEGATION_MARKER + prefix)
    marker = NEGATION_MARKER + prefix if negative else prefix
    if not arg.startswith(marker):
        raise FilterPrefixError(f"'{prefix}' prefix missing for {arg}")
    source = arg[len(marker) :]
    if lowercase:
        source = source.lower()
    compiled = compile_pattern(source, mode, diagnostics)
    return Negative(compiled) if negative else Positive(compiled)


def _filter_prefix(arg: str) -> str | None:
    """Return the filter prefix *arg* carries, or ``None`` for a root path."""
    for prefix in (FILE_PREFIX, PATH_PREFIX, CONTENT_PREFIX):
        if arg.startswith(prefix) or arg.startswith(NEGATION_MARKER + prefix):
            return prefix
    return None


def _compile_excludes(
    sources: Iterable[str], diagnostics: Diagnostics | None
) -> list[Matcher]:
    return [
        Negative(compile_pattern(source.lower(), MatchMode.WHOLE, diagnostics))
        for source in sources
    ]


@dataclass(frozen=True, slots=True)
class SearchSpec:
    """Everything a traversal needs, fixed before the walk starts.

    Attributes:
        roots: Paths to walk, in order.
        file_filters: Applied to the lowercased base name of files.
        path_filters: Applied to the lowercased full path of every entry.
        content_filters: Applied to the text content of files.
        content_case_insensitive: Whether content is lowercased before
            matching (content patterns are then lowercased as well).
        follow_symlinks: Whether symbolic links to directories are walked.
        gitignore: Whether entries ignored by a root's ``.gitignore`` are
            left out of the results.
    """

    roots: tuple[str, ...] = (DEFAULT_ROOT,)
    file_filters: FilterSet = field(default_factory=FilterSet)
    path_filters: FilterSet = field(default_factory=FilterSet)
    content_filters: FilterSet = field(default_factory=FilterSet)
    content_case_insensitive: bool = False
    follow_symlinks: bool = False
    gitignore: bool = False

    @classmethod
    def from_args(
        cls,
        args: Sequence[str],
        *,
        content_case_insensitive: bool = False,
        follow_symlinks: bool = False,
        gitignore: bool = False,
        exclude_names: Iterable[str] = (),
        exclude_paths: Iterable[str] = (),
        diagnostics: Diagnostics | None = None,
    ) -> SearchSpec:
        """Build a spec from positional arguments.

        Arguments carrying a filter prefix become filters, everything else
        is a root path. Name and path patterns are lowercased. Externally
        supplied exclusions are appended after the argument filters.

        Args:
            args: Roots and prefixed filter arguments.
            content_case_insensitive: Lowercase content patterns and content.
            follow_symlinks: Walk through symbolic links to directories.
            gitignore: Honor ``.gitignore`` files at the roots.
            exclude_names: Extra negative file-name dot patterns.
            exclude_paths: Extra negative path dot patterns.
            diagnostics: Optional diagnostics collaborator.

        Returns:
            SearchSpec: The assembled search.

        Raises:
            InvalidPatternError: If any pattern does not compile.
        """
        roots: list[str] = []
        files: list[Matcher] = []
        paths: list[Matcher] = []
        contents: list[Matcher] = []
        for arg in args:
            prefix = _filter_prefix(arg)
            if prefix == FILE_PREFIX:
                files.append(
                    filter_from_arg(arg, FILE_PREFIX, MatchMode.WHOLE, True, diagnostics)
                )
            elif prefix == PATH_PREFIX:
                paths.append(
                    filter_from_arg(arg, PATH_PREFIX, MatchMode.WHOLE, True, diagnostics)
                )
            elif prefix == CONTENT_PREFIX:
                # content matches anywhere, not the whole text
                contents.append(
                    filter_from_arg(
                        arg,
                        CONTENT_PREFIX,
                        MatchMode.SUBSTRING,
                        content_case_insensitive,
                        diagnostics,
                    )
                )
            else:
                roots.append(arg)

        files.extend(_compile_excludes(exclude_names, diagnostics))
        paths.extend(_compile_excludes(exclude_paths, diagnostics))

        return cls(
            roots=tuple(roots) or (DEFAULT_ROOT,),
            file_filters=FilterSet(files),
            path_filters=FilterSet(paths),
            content_filters=FilterSet(contents),
            content_case_insensitive=content_case_insensitive,
            follow_symlinks=follow_symlinks,
            gitignore=gitignore,
        )

    def __str__(self) -> str:
        return (
            f"roots: {list(self.roots)}, files: {self.file_filters!r}, "
            f"paths: {self.path_filters!r}, content: {self.content_filters!r}"
        )

"""Dot pattern compilation.

A dot pattern is a list of literal segments separated by ``..``. Every
segment is matched verbatim and any text (including none) may appear
between two consecutive segments::

    foo..bar      "foo" followed, somewhere later, by "bar"
    ..test..      anything containing "test"
    main.go       exactly "main.go" (a single dot is a literal)

Name and path patterns must match the whole subject; content patterns
may match anywhere in it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from dotfind import InvalidPatternError

if TYPE_CHECKING:
    from dotfind.scanner import Diagnostics

SEPARATOR = ".."

# Non-greedy gap between two literal segments.
_GAP = ".*?"


class MatchMode(Enum):
    """How much of the subject a compiled pattern must cover."""

    WHOLE = "whole"
    SUBSTRING = "substring"


@dataclass(frozen=True, slots=True)
class DotPattern:
    """A parsed dot pattern.

    Attributes:
        source: Raw pattern string as supplied by the user.
        segments: Literal segments in order. Leading or trailing
            separators produce empty segments, which are kept.
    """

    source: str
    segments: tuple[str, ...]

    @classmethod
    def parse(cls, source: str) -> DotPattern:
        return cls(source=source, segments=tuple(source.split(SEPARATOR)))

    def to_regex(self, mode: MatchMode) -> str:
        """Return the regular expression source for *mode*.

        Args:
            mode: Whole-subject or substring matching.

        Returns:
            str: Escaped segments joined by a non-greedy gap, anchored
            at both ends for ``MatchMode.WHOLE``.
        """
        expression = _GAP.join(re.escape(segment) for segment in self.segments)
        if mode is MatchMode.WHOLE:
            return rf"\A{expression}\Z"
        return expression


@dataclass(frozen=True, slots=True)
class CompiledMatcher:
    """A dot pattern compiled to an executable predicate."""

    pattern: DotPattern
    mode: MatchMode
    regex: re.Pattern[str]

    def match(self, text: str) -> bool:
        return self.regex.search(text) is not None

    def __str__(self) -> str:
        return f"{self.pattern.source} /{self.regex.pattern}/"


def compile_pattern(
    source: str,
    mode: MatchMode,
    diagnostics: Diagnostics | None = None,
) -> CompiledMatcher:
    """Compile a raw dot pattern.

    The pattern is used as given; callers lowercase it beforehand when
    the subject is lowercased too.

    Args:
        source: Raw dot pattern.
        mode: Matching mode.
        diagnostics: Optional collaborator receiving a debug message with
            the generated expression.

    Returns:
        CompiledMatcher: The compiled matcher.

    Raises:
        InvalidPatternError: If the generated expression does not compile.
    """
    pattern = DotPattern.parse(source)
    expression = pattern.to_regex(mode)
    try:
        # DOTALL lets a gap span line breaks in file content.
        regex = re.compile(expression, re.DOTALL)
    except re.error as exc:
        raise InvalidPatternError(f"invalid pattern '{source}': {exc}") from exc
    compiled = CompiledMatcher(pattern=pattern, mode=mode, regex=regex)
    if diagnostics is not None:
        diagnostics.debug("compiled pattern: %s", compiled)
    return compiled

"""Matchers and filter sets built from compiled dot patterns."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Union

from dotfind.pattern import CompiledMatcher


@dataclass(frozen=True, slots=True)
class Positive:
    """Accepts text the compiled pattern matches."""

    compiled: CompiledMatcher

    def match(self, text: str) -> bool:
        return self.compiled.match(text)

    def __str__(self) -> str:
        return str(self.compiled)


@dataclass(frozen=True, slots=True)
class Negative:
    """Accepts text the compiled pattern does not match."""

    compiled: CompiledMatcher

    def match(self, text: str) -> bool:
        return not self.compiled.match(text)

    def __str__(self) -> str:
        return f"!{self.compiled}"


Matcher = Union[Positive, Negative]


def negate(matcher: Matcher) -> Matcher:
    """Return a matcher with the opposite polarity.

    Args:
        matcher: Matcher to invert. It is left unchanged.

    Returns:
        Matcher: ``Negative`` for a positive matcher and vice versa.
    """
    if isinstance(matcher, Positive):
        return Negative(matcher.compiled)
    return Positive(matcher.compiled)


class FilterSet:
    """AND-combination of matchers for one target (name, path or content).

    An empty filter set accepts everything.
    """

    __slots__ = ("_matchers",)

    def __init__(self, matchers: Iterable[Matcher] = ()) -> None:
        self._matchers: tuple[Matcher, ...] = tuple(matchers)

    def accepts(self, text: str) -> bool:
        """Return whether every matcher accepts *text*.

        Evaluation stops at the first rejecting matcher.
        """
        return all(matcher.match(text) for matcher in self._matchers)

    def first_rejecting(self, text: str) -> Matcher | None:
        """Return the first matcher rejecting *text*, or ``None``."""
        for matcher in self._matchers:
            if not matcher.match(text):
                return matcher
        return None

    def extend(self, matchers: Iterable[Matcher]) -> FilterSet:
        """Return a new filter set with *matchers* appended."""
        return FilterSet((*self._matchers, *matchers))

    def __iter__(self) -> Iterator[Matcher]:
        return iter(self._matchers)

    def __len__(self) -> int:
        return len(self._matchers)

    def __repr__(self) -> str:
        return f"FilterSet([{', '.join(str(m) for m in self._matchers)}])"

"""Tests for dotfind.pattern."""

import logging

import pytest

from dotfind import InvalidPatternError
from dotfind.pattern import DotPattern, MatchMode, compile_pattern
from dotfind.scanner import Diagnostics


class TestDotPattern:
    @pytest.mark.parametrize(
        ("source", "segments"),
        [
            ("main.go", ("main.go",)),
            ("foo..bar", ("foo", "bar")),
            ("..test..", ("", "test", "")),
            ("..", ("", "")),
            ("", ("",)),
            ("a...b", ("a", ".b")),
        ],
    )
    def test_parse_keeps_empty_segments(self, source: str, segments: tuple[str, ...]) -> None:
        assert DotPattern.parse(source).segments == segments

    def test_parse_keeps_source(self) -> None:
        assert DotPattern.parse("..x..").source == "..x.."


class TestWholeMatch:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("main.go", True),
            ("main_go", False),  # a single dot is literal
            ("xmain.go", False),
            ("main.gox", False),
            ("", False),
        ],
    )
    def test_literal_is_exact_match(self, text: str, expected: bool) -> None:
        assert compile_pattern("main.go", MatchMode.WHOLE).match(text) is expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("ab", True),
            ("a-anything-b", True),
            ("abab", True),
            ("ba", False),
            ("a", False),
            ("abx", False),
            ("xab", False),
        ],
    )
    def test_gap_between_segments(self, text: str, expected: bool) -> None:
        assert compile_pattern("a..b", MatchMode.WHOLE).match(text) is expected

    @pytest.mark.parametrize(("text", "expected"), [("aa", False), ("aaa", True), ("aaaa", True)])
    def test_segments_cannot_overlap(self, text: str, expected: bool) -> None:
        assert compile_pattern("aa..a", MatchMode.WHOLE).match(text) is expected

    @pytest.mark.parametrize("text", ["a_test.go", "test", "contest.py"])
    def test_surrounding_separators_mean_contains(self, text: str) -> None:
        assert compile_pattern("..test..", MatchMode.WHOLE).match(text) is True

    def test_regex_metacharacters_are_literal(self) -> None:
        matcher = compile_pattern("f(x)*[1]+.py", MatchMode.WHOLE)
        assert matcher.match("f(x)*[1]+.py") is True
        assert matcher.match("fxx1.py") is False

    def test_trailing_newline_is_not_ignored(self) -> None:
        assert compile_pattern("abc", MatchMode.WHOLE).match("abc\n") is False

    @pytest.mark.parametrize("text", ["", "x", "anything at all"])
    def test_only_separators_match_anything(self, text: str) -> None:
        assert compile_pattern("..", MatchMode.WHOLE).match(text) is True
        assert compile_pattern("....", MatchMode.WHOLE).match(text) is True

    def test_empty_pattern_matches_only_empty_text(self) -> None:
        matcher = compile_pattern("", MatchMode.WHOLE)
        assert matcher.match("") is True
        assert matcher.match("x") is False


class TestSubstringMatch:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("// TODO: fix", True),
            ("TODO", True),
            ("// todo: fix", False),
        ],
    )
    def test_literal_matches_anywhere(self, text: str, expected: bool) -> None:
        assert compile_pattern("TODO", MatchMode.SUBSTRING).match(text) is expected

    def test_gap_spans_lines(self) -> None:
        matcher = compile_pattern("foo..bar", MatchMode.SUBSTRING)
        assert matcher.match("x foo\nbaz\nbar y") is True
        assert matcher.match("bar\nfoo") is False


class TestCompile:
    def test_deterministic(self) -> None:
        first = compile_pattern("src..main..go", MatchMode.WHOLE)
        second = compile_pattern("src..main..go", MatchMode.WHOLE)
        assert first.regex.pattern == second.regex.pattern
        for text in ["src/main.go", "srcmaingo", "main.go", "src/x/main/y.go", ""]:
            assert first.match(text) == second.match(text)

    def test_modes_differ_only_in_anchoring(self) -> None:
        whole = compile_pattern("a..b", MatchMode.WHOLE)
        substring = compile_pattern("a..b", MatchMode.SUBSTRING)
        assert whole.match("xaby") is False
        assert substring.match("xaby") is True

    def test_compile_failure_raises_invalid_pattern(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(DotPattern, "to_regex", lambda self, mode: "(")
        with pytest.raises(InvalidPatternError, match="invalid pattern 'x'"):
            compile_pattern("x", MatchMode.WHOLE)

    def test_str_shows_source_and_expression(self) -> None:
        text = str(compile_pattern("a..b", MatchMode.SUBSTRING))
        assert text.startswith("a..b /")
        assert "a.*?b" in text

    def test_debug_message_when_verbose(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="dotfind")
        compile_pattern("a..b", MatchMode.WHOLE, Diagnostics(verbose=True))
        assert "compiled pattern: a..b" in caplog.text

    def test_no_debug_message_when_quiet(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="dotfind")
        compile_pattern("a..b", MatchMode.WHOLE, Diagnostics())
        assert caplog.text == ""

"""Tests for the query compiler."""

import pytest

from cc_history.errors import InvalidPatternError
from cc_history.query import compile_query, matches_pattern, parse_search_pattern


def test_parse_search_pattern_classes():
    """Bare tokens are AND, pipes are OR groups, bang is NOT."""
    pattern = parse_search_pattern("Error build|deploy !Timeout")

    assert pattern.must_have == ["error"]
    assert pattern.any_of == [["build", "deploy"]]
    assert pattern.must_not == ["timeout"]


def test_parse_drops_empty_terms():
    pattern = parse_search_pattern("! a||b |")

    assert pattern.must_not == []
    assert pattern.any_of == [["a", "b"]]
    assert pattern.must_have == []


def test_not_takes_precedence_over_or():
    pattern = parse_search_pattern("!a|b")

    assert pattern.must_not == ["a|b"]
    assert pattern.any_of == []


def test_case_sensitive_keeps_terms():
    pattern = parse_search_pattern("Error", case_sensitive=True)
    assert pattern.must_have == ["Error"]


def test_and_not_scenario():
    matcher = compile_query("error !timeout")

    assert matcher("fatal error occurred")
    assert not matcher("error: timeout")


def test_or_groups_all_required():
    matcher = compile_query("a|b c|d")

    assert matcher("b and d")
    assert not matcher("b only")


def test_substring_containment():
    """Terms match inside words, not as whole tokens."""
    assert compile_query("err")("TypeError raised")


@pytest.mark.parametrize(
    "pattern",
    ["alpha beta !gamma x|y", "beta alpha x|y !gamma", "!gamma y|x beta alpha"],
)
def test_term_order_does_not_matter(pattern):
    matcher = compile_query(pattern)

    assert matcher("ALPHA beta x")
    assert not matcher("alpha beta x gamma")
    assert not matcher("alpha beta")


def test_case_sensitive_matching():
    matcher = compile_query("Error", case_sensitive=True)

    assert matcher("An Error happened")
    assert not matcher("an error happened")


def test_empty_pattern_matches_everything():
    matcher = compile_query("")
    assert matcher("")
    assert matcher("anything")


def test_regex_is_case_insensitive_by_default():
    matcher = compile_query(r"fail(ed|ure)", use_regex=True)

    assert matcher("Build FAILED")
    assert not matcher("build passed")


def test_regex_case_sensitive():
    matcher = compile_query(r"^Error", use_regex=True, case_sensitive=True)

    assert matcher("Error at start")
    assert not matcher("error at start")


def test_invalid_regex():
    with pytest.raises(InvalidPatternError) as exc:
        compile_query("(unclosed", use_regex=True)

    assert exc.value.kind == "invalid_pattern"
    assert "missing )" in exc.value.message


def test_matches_pattern_direct():
    pattern = parse_search_pattern("foo")
    assert matches_pattern("xFOOx", pattern)
    assert not matches_pattern("xFOOx", parse_search_pattern("foo", True), case_sensitive=True)

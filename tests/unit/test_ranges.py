"""Tests for line-range expressions."""

from cc_history.models import Range
from cc_history.ranges import line_in_ranges, parse_ranges


def test_parse_all_forms():
    ranges = parse_ranges("5,10-20,30-,-3,!12-14")

    assert ranges == [
        Range(5, 5),
        Range(10, 20),
        Range(30, None),
        Range(None, 3),
        Range(12, 14, exclude=True),
    ]


def test_parse_skips_garbage():
    """Unparsable numbers are dropped instead of failing the expression."""
    assert parse_ranges("abc, ,7") == [Range(7, 7)]
    assert parse_ranges("5-x") == [Range(5, None)]


def test_signed_bounds_are_open():
    ranges = parse_ranges("--5")

    assert ranges == [Range(None, None)]
    for line in (1, 2, 3):
        assert line_in_ranges(line, ranges)

    assert parse_ranges("+5,1_0") == []
    assert parse_ranges("2-+4") == [Range(2, None)]


def test_parse_empty():
    assert parse_ranges("") == []
    assert parse_ranges(None) == []


def test_include_with_exclusion_scenario():
    ranges = parse_ranges("1-5,!3")

    assert not line_in_ranges(3, ranges)
    for line in (1, 2, 4, 5):
        assert line_in_ranges(line, ranges)
    assert not line_in_ranges(6, ranges)


def test_exclusion_always_wins():
    ranges = parse_ranges("!10-20,1-100,15")
    assert not line_in_ranges(15, ranges)


def test_exclusion_only_accepts_rest():
    ranges = parse_ranges("!2-3")

    assert line_in_ranges(1, ranges)
    assert not line_in_ranges(2, ranges)
    assert line_in_ranges(1000, ranges)


def test_no_ranges_accept_everything():
    assert line_in_ranges(42, [])


def test_open_bounds():
    assert line_in_ranges(1000, parse_ranges("100-"))
    assert not line_in_ranges(99, parse_ranges("100-"))
    assert line_in_ranges(1, parse_ranges("-3"))
    assert not line_in_ranges(4, parse_ranges("-3"))

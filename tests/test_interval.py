"""Tests for the interval library."""

from __future__ import annotations

import datetime
import itertools
import math
import random
from decimal import Decimal
from fractions import Fraction
from typing import Any

import pytest

from calrange.bound import INF, NEG_INF
from calrange.exceptions import (
    IntervalError,
    InvalidFormatError,
    NotIntegerIntervalError,
    SyntheticCodepointError,
)
from calrange.interval import Interval


@pytest.mark.parametrize(
    ("interval", "expected"),
    [
        (Interval(1, 5), "1..5"),
        (Interval(1, 5, excludes_min=True), "1^..5"),
        (Interval(1, 5, excludes_max=True), "1..^5"),
        (Interval(1, 5, True, True), "1^..^5"),
        (Interval(-math.inf, 0, excludes_max=True), "-Inf..^0"),
        (Interval(0, INF), "0..Inf"),
        (Interval("a", "z"), "a..z"),
    ],
)
def test_render(interval: Interval[Any], expected: str) -> None:
    """Test the rendering of each combination of excluded bounds."""
    assert str(interval) == expected
    assert repr(interval) == f"Interval({expected})"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, False),
        (1, True),
        (3, True),
        (Decimal("4.5"), True),
        (5, True),
        (5.0001, False),
        (Fraction(1, 2), False),
    ],
)
def test_contains(value: Any, expected: bool) -> None:
    """Test membership of a closed interval."""
    assert Interval(1, 5).contains(value) == expected
    assert (value in Interval(1, 5)) == expected


def test_contains_excluded_bounds() -> None:
    """Test excluded bounds use a strict comparison."""
    assert not Interval(1, 5, excludes_min=True).contains(1)
    assert Interval(1, 5, excludes_min=True).contains(Decimal("1.0001"))
    assert not Interval(1, 5, excludes_max=True).contains(5)
    assert Interval(1, 5, excludes_max=True).contains(4.9999)


def test_contains_infinite_bounds() -> None:
    """Test an infinite bound is always satisfied."""
    assert 10**100 in Interval(0, INF)
    assert -(10**100) not in Interval(0, INF)
    assert -(10**100) in Interval(NEG_INF, 0)
    assert 0 in Interval(-math.inf, math.inf, True, True)


def test_contains_heterogeneous() -> None:
    """Test scalars are coerced to the representation of the bounds."""
    assert "3" in Interval(1, 5)
    assert "5.5" not in Interval(1, 5)
    assert " 2.5 " in Interval(1, 5)
    assert 5 in Interval("1", "9")
    assert 10 not in Interval("a", "z")
    with pytest.raises(TypeError, match="Unable to compare"):
        Interval(1, 5).contains("three")


def test_contains_interval() -> None:
    """Test an interval contains its subsets."""
    interval = Interval(1, 10)
    assert interval.contains(Interval(2, 9))
    assert Interval(1, 10) in interval
    assert interval.contains(Interval(1, 10, True, True))
    assert not Interval(1, 10, excludes_min=True).contains(Interval(1, 5))
    assert not interval.contains(Interval(5, 11))
    assert interval.contains(Interval(5, 1))
    assert Interval(NEG_INF, INF).contains(Interval(-5, INF))
    assert not interval.contains(Interval(0, INF))


@pytest.mark.parametrize(
    ("first", "second", "expected"),
    [
        (Interval(1, 10), Interval(-math.inf, math.inf), True),
        (Interval(1, 5), Interval(5, 10), True),
        (Interval(1, 5, excludes_max=True), Interval(5, 10), False),
        (Interval(1, 5), Interval(5, 10, excludes_min=True), False),
        (Interval(1, 3, excludes_max=True), Interval(2, 5, excludes_min=True), True),
        (Interval(1, 2), Interval(3, 4), False),
        (Interval(1, 10), Interval(3, 4), True),
        (Interval(NEG_INF, 0), Interval(0, INF), True),
        (Interval(NEG_INF, 0, excludes_max=True), Interval(0, INF), False),
        (Interval(5, 1), Interval(NEG_INF, INF), False),
        (Interval(1, 1, excludes_min=True), Interval(0, 2), False),
        (Interval("a", "m"), Interval("k", "z"), True),
    ],
)
def test_overlaps(first: Interval[Any], second: Interval[Any], expected: bool) -> None:
    """Test overlap is symmetric."""
    assert first.overlaps(second) == expected
    assert second.overlaps(first) == expected


def test_properties() -> None:
    """Test the bounds and flags of an interval."""
    interval = Interval(1, INF, excludes_min=True)
    assert interval.bounds() == (1, INF)
    assert interval.min == 1
    assert interval.max is INF
    assert interval.excludes_min
    assert not interval.excludes_max
    assert interval.infinite
    assert interval.is_discrete
    assert not Interval(1, 5).infinite


@pytest.mark.parametrize(
    ("interval", "expected"),
    [
        (Interval(1, 5), True),
        (Interval("a", "e"), True),
        (Interval(datetime.date(2015, 1, 1), datetime.date(2015, 2, 1)), True),
        (Interval(NEG_INF, 5), True),
        (Interval(1.0, 5.0), False),
        (Interval(Decimal(1), Decimal(5)), False),
        (Interval(1, 5.5), False),
        (Interval(True, True), False),
        (Interval("aa", "zz"), False),
        (Interval(NEG_INF, INF), False),
    ],
)
def test_is_discrete(interval: Interval[Any], expected: bool) -> None:
    """Test which element types can be counted."""
    assert interval.is_discrete == expected


@pytest.mark.parametrize(
    ("interval", "expected"),
    [
        (Interval(1, 5), 5),
        (Interval(1, 5, True, True), 3),
        (Interval(1, 5, excludes_min=True), 4),
        (Interval(5, 1), 0),
        (Interval(1, 1), 1),
        (Interval(1, 1, excludes_max=True), 0),
        (Interval(1, 2, True, True), 0),
        (Interval(-3, 3), 7),
        (Interval("a", "z"), 26),
        (Interval(datetime.date(2016, 2, 1), datetime.date(2016, 3, 1), excludes_max=True), 29),
        (Interval.upto(10), 10),
        (Interval.upto(0), 0),
    ],
)
def test_element_count(interval: Interval[Any], expected: int) -> None:
    """Test counting the elements of a finite discrete interval."""
    assert interval.element_count() == expected
    assert len(list(interval)) == expected
    assert interval.is_empty == (expected == 0)


@pytest.mark.parametrize(
    "interval",
    [
        Interval(1.0, 5.0),
        Interval(1, INF),
        Interval(NEG_INF, 1),
        Interval("ab", "cd"),
    ],
)
def test_element_count_not_integer(interval: Interval[Any]) -> None:
    """Test counting a non-discrete or infinite interval."""
    with pytest.raises(NotIntegerIntervalError):
        interval.element_count()


def test_effective_bounds() -> None:
    """Test resolving excluded bounds to the included elements."""
    assert Interval(1, 5, True, True).effective_bounds() == (2, 4)
    assert Interval("a", "e", excludes_max=True).effective_bounds() == ("a", "d")
    assert Interval(1, INF, excludes_min=True).effective_bounds() == (2, INF)
    with pytest.raises(NotIntegerIntervalError):
        Interval(1.5, 2.5).effective_bounds()


def test_at() -> None:
    """Test indexed access of a finite interval."""
    interval = Interval(1, 5)
    assert interval.at(0) == 1
    assert interval.at(4) == 5
    assert interval.at(5) is None
    assert interval.at(10) is None
    assert interval.at(-1) is None
    assert interval[2] == 3
    assert interval[1:3] == [2, 3]
    assert Interval(1, 5, excludes_min=True)[0] == 2
    assert Interval("a", "z")[25] == "z"
    assert Interval(datetime.date(2015, 12, 30), datetime.date(2016, 1, 2))[2] == (
        datetime.date(2016, 1, 1)
    )


def test_at_open_end() -> None:
    """Test any non-negative position resolves for an open ended interval."""
    interval = Interval(0, INF, excludes_min=True)
    assert interval.at(0) == 1
    assert interval.at(10**6) == 10**6 + 1
    assert interval[:3] == [1, 2, 3]
    with pytest.raises(NotIntegerIntervalError):
        Interval(NEG_INF, 0).at(0)
    with pytest.raises(NotIntegerIntervalError):
        Interval(1.0, 2.0).at(0)


def test_to_sequence() -> None:
    """Test the sequence of a finite interval can be traversed twice."""
    sequence = Interval(1, 5, excludes_max=True).to_sequence()
    assert list(sequence) == [1, 2, 3, 4]
    assert list(sequence) == [1, 2, 3, 4]
    assert list(Interval("x", "z")) == ["x", "y", "z"]
    assert list(Interval(5, 1)) == []


def test_to_sequence_infinite() -> None:
    """Test an open ended sequence is lazy and restartable."""
    sequence = Interval(1, INF).to_sequence()
    assert list(itertools.islice(sequence, 3)) == [1, 2, 3]
    assert list(itertools.islice(sequence, 3)) == [1, 2, 3]
    iterator = iter(sequence)
    assert next(iterator) == 1
    assert next(iter(sequence)) == 1
    assert next(iterator) == 2


def test_to_sequence_infinite_start() -> None:
    """Test enumerating from an infinite start produces the sentinel."""
    assert list(itertools.islice(Interval(NEG_INF, 0), 3)) == [NEG_INF] * 3
    assert list(Interval(INF, INF)) == []


def test_to_sequence_reals() -> None:
    """Test real numbers are enumerated by stepping by one."""
    assert list(Interval(0.5, 3)) == [0.5, 1.5, 2.5]
    assert list(Interval(Decimal("0.5"), 3, True, False)) == [
        Decimal("1.5"),
        Decimal("2.5"),
    ]
    assert list(Interval(Fraction(1, 3), 2)) == [Fraction(1, 3), Fraction(4, 3)]


def test_to_sequence_not_enumerable() -> None:
    """Test enumerating an element type without a successor."""
    with pytest.raises(NotIntegerIntervalError):
        Interval("aa", "zz").to_sequence()
    with pytest.raises(NotIntegerIntervalError):
        list(Interval(datetime.time(1), datetime.time(2)))


def test_synthetic_codepoints() -> None:
    """Test text with combining codepoints can't be enumerated."""
    interval = Interval("e\u0301", "z")
    with pytest.raises(SyntheticCodepointError):
        interval.to_sequence()
    with pytest.raises(SyntheticCodepointError):
        interval.element_count()
    with pytest.raises(SyntheticCodepointError):
        Interval("a", "\u0301").at(0)
    assert "f" in interval


def test_reverse() -> None:
    """Test the descending sequence of a finite interval."""
    assert list(Interval(1, 5).reverse()) == [5, 4, 3, 2, 1]
    assert list(Interval(1, 5, True, True).reverse()) == [4, 3, 2]
    assert list(Interval("a", "c").reverse()) == ["c", "b", "a"]
    assert list(itertools.islice(Interval(NEG_INF, 3).reverse(), 2)) == [3, 2]
    assert list(Interval(5, 1).reverse()) == []


def test_reverse_infinite_end() -> None:
    """Test reversing an interval with an infinite end produces the sentinel."""
    assert list(itertools.islice(Interval(1, INF).reverse(), 3)) == [INF, INF, INF]


@pytest.mark.parametrize(
    ("result", "expected"),
    [
        (Interval(1, 10) + 1, Interval(2, 11)),
        (1 + Interval(1, 10), Interval(2, 11)),
        (Interval(1, 10) - 1, Interval(0, 9)),
        (Interval(1, 10) * 2, Interval(2, 20)),
        (2 * Interval(1, 10), Interval(2, 20)),
        (Interval(2, 4) / 2, Interval(1, 2)),
        (Interval(1, 10, True, False) + 1, Interval(2, 11, True, False)),
        (Interval(1, INF, excludes_min=True) * 3, Interval(3, INF, excludes_min=True)),
        (Interval(NEG_INF, 5) - 10, Interval(NEG_INF, -5)),
        (Interval(1, INF) * -1, Interval(-1, NEG_INF)),
    ],
)
def test_arithmetic(result: Interval[Any], expected: Interval[Any]) -> None:
    """Test shifting and scaling both bounds."""
    assert result == expected


def test_arithmetic_unsupported() -> None:
    """Test arithmetic between two intervals."""
    with pytest.raises(TypeError):
        Interval(1, 2) + Interval(3, 4)  # type: ignore[operator]
    with pytest.raises(ValueError):
        Interval(1, INF) * 0


@pytest.mark.parametrize(
    ("interval", "other", "expected"),
    [
        (Interval(1, 5), Interval(1, 5), 0),
        (Interval(1, 5), Interval(1, 6), -1),
        (Interval(2, 5), Interval(1, 6), 1),
        (Interval(1, 5), 1, 1),
        (Interval(1, 1), 1, 0),
        (Interval(1, 5), (1, 5), 0),
        (Interval(1, 5), [0, 9], 1),
        (Interval(1, 5), ("1", "5"), 0),
        (Interval(NEG_INF, 5), Interval(-(10**9), 5), -1),
        (Interval(1, INF), Interval(1, 10**9), 1),
        (Interval("a", "c"), "a", 1),
    ],
)
def test_cmp(interval: Interval[Any], other: Any, expected: int) -> None:
    """Test three way comparison on the start and then the end."""
    assert interval.cmp(other) == expected
    assert (interval < other) == (expected < 0)
    assert (interval <= other) == (expected <= 0)
    assert (interval > other) == (expected > 0)
    assert (interval >= other) == (expected >= 0)


def test_sorted() -> None:
    """Test intervals sort by start and then by end."""
    values = [Interval(2, 3), Interval(1, 5), Interval(1, 2), Interval(NEG_INF, 9)]
    assert [str(value) for value in sorted(values)] == [
        "-Inf..9",
        "1..2",
        "1..5",
        "2..3",
    ]


def test_equality() -> None:
    """Test intervals are equal when the bounds and flags are equal."""
    assert Interval(1, 5) == Interval(1, 5)
    assert Interval(1, 5) != Interval(1, 5, excludes_max=True)
    assert Interval(1, math.inf) == Interval(1, INF)
    assert hash(Interval(1, math.inf)) == hash(Interval(1, INF))
    assert len({Interval(1, 5), Interval(1, 5), Interval(1, 6)}) == 2
    assert Interval(1, 5) != (1, 5)


def test_upto() -> None:
    """Test the interval of the first integers."""
    assert Interval.upto(5) == Interval(0, 5, excludes_max=True)
    assert list(Interval.upto(3)) == [0, 1, 2]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1..5", Interval(1, 5)),
        ("1^..5", Interval(1, 5, excludes_min=True)),
        ("1..^5", Interval(1, 5, excludes_max=True)),
        ("-1^..^5", Interval(-1, 5, True, True)),
        ("-Inf..^0", Interval(NEG_INF, 0, excludes_max=True)),
        ("0..inf", Interval(0, INF)),
        ("0.5..2.5", Interval(Decimal("0.5"), Decimal("2.5"))),
    ],
)
def test_parse(text: str, expected: Interval[Any]) -> None:
    """Test parsing the rendering of a numeric interval."""
    assert Interval.parse(text) == expected
    assert Interval.parse(str(expected)) == expected


def test_parse_invalid() -> None:
    """Test parsing text that is not an interval."""
    with pytest.raises(InvalidFormatError):
        Interval.parse("1..5..7")
    with pytest.raises(InvalidFormatError):
        Interval.parse("a..z")


def test_sum() -> None:
    """Test the sum of an integer interval."""
    assert Interval(1, 100).sum() == 5050
    assert Interval(1, 100, True, True).sum() == 4949
    assert Interval(-10**12, 10**12).sum() == 0
    assert Interval(5, 1).sum() == 0
    with pytest.raises(NotIntegerIntervalError):
        Interval("a", "c").sum()
    with pytest.raises(NotIntegerIntervalError):
        Interval(1, INF).sum()


def test_pick(rng: random.Random) -> None:
    """Test drawing distinct values without materializing the interval."""
    interval = Interval(1, 10**18)
    values = interval.pick(5, rng=rng)
    assert len(values) == 5
    assert len(set(values)) == 5
    assert all(value in interval for value in values)
    assert interval.pick(rng=rng) in interval

    small = Interval(1, 5, excludes_max=True)
    assert sorted(small.pick(10, rng=rng)) == [1, 2, 3, 4]
    assert Interval(5, 1).pick(rng=rng) is None
    assert Interval(5, 1).pick(3, rng=rng) == []


def test_pick_seeded() -> None:
    """Test the same seed draws the same values."""
    interval = Interval("a", "z")
    assert interval.pick(3, rng=random.Random(7)) == interval.pick(3, rng=random.Random(7))


def test_roll(rng: random.Random) -> None:
    """Test drawing values with replacement."""
    interval = Interval(1, 2)
    values = interval.roll(50, rng=rng)
    assert len(values) == 50
    assert set(values) == {1, 2}
    assert interval.roll(rng=rng) in (1, 2)
    assert Interval(datetime.date(2015, 1, 1), datetime.date(2015, 1, 31)).roll(
        rng=rng
    ).month == 1
    assert Interval(2, 1).roll(rng=rng) is None
    assert Interval(2, 1).roll(3, rng=rng) == []


@pytest.mark.parametrize(
    "interval", [Interval(1, INF), Interval(NEG_INF, 1), Interval(1.0, 5.0)]
)
def test_pick_not_integer(interval: Interval[Any]) -> None:
    """Test drawing from an unbounded or non-discrete interval."""
    with pytest.raises(NotIntegerIntervalError):
        interval.pick()
    with pytest.raises(NotIntegerIntervalError):
        interval.roll(2)


def test_rand(rng: random.Random) -> None:
    """Test drawing a real number from a numeric interval."""
    interval = Interval(1, 2, True, True)
    for _ in range(20):
        value = interval.rand(rng=rng)
        assert 1 < value < 2
    assert 0.5 <= Interval(Decimal("0.5"), Decimal("0.75")).rand(rng=rng) <= 0.75
    with pytest.raises(IntervalError, match="infinite"):
        Interval(1, INF).rand()
    with pytest.raises(IntervalError, match="empty"):
        Interval(2, 1).rand()
    with pytest.raises(IntervalError, match="non-numeric"):
        Interval("a", "b").rand()


def test_line_operations_ignore_element_count() -> None:
    """Test overlap, subset and drawing treat bounds as points on a line."""
    interval = Interval(1, 2, True, True)
    assert interval.is_empty
    assert interval.contains(1.5)
    assert interval.overlaps(Interval(0, 10))
    assert Interval(0, 10).overlaps(interval)
    assert not Interval(0, 1).contains(interval)
    assert Interval(1, 2).contains(interval)
    assert not interval.overlaps(Interval(2, 3))
    assert not Interval(1, 1, True, True).overlaps(Interval(0, 2))


@pytest.mark.parametrize(
    "interval",
    [
        Interval("\x00", "\x00", excludes_max=True),
        Interval("\U0010ffff", "\U0010ffff", excludes_min=True),
        Interval(datetime.date.min, datetime.date.min, excludes_max=True),
        Interval(datetime.date.max, datetime.date.max, excludes_min=True),
    ],
)
def test_excluded_bound_at_end_of_type(interval: Interval[Any]) -> None:
    """Test an excluded bound at the first or last value of its type."""
    assert interval.element_count() == 0
    assert interval.is_empty
    assert interval.at(0) is None
    assert list(interval) == []
    assert list(interval.reverse()) == []
    assert interval.pick() is None
    with pytest.raises(IntervalError, match="end of its type"):
        interval.effective_bounds()


def test_enumerate_to_end_of_type() -> None:
    """Test enumerating up to the last or first value of a type."""
    assert list(Interval("\U0010fffe", "\U0010ffff")) == ["\U0010fffe", "\U0010ffff"]
    assert list(Interval("\x00", "\x01").reverse()) == ["\x01", "\x00"]
    last_days = Interval(datetime.date.max - datetime.timedelta(days=1), datetime.date.max)
    assert list(last_days) == [
        datetime.date.max - datetime.timedelta(days=1),
        datetime.date.max,
    ]
    assert list(Interval(datetime.date.min, datetime.date.min).reverse()) == [
        datetime.date.min
    ]
    assert Interval("\x00", "\U0010ffff").element_count() == 0x110000
    assert Interval("\U0010ffff", INF).at(1) is None


@pytest.mark.parametrize("position", [1.5, 2.0, Decimal(1), "1", True, None])
def test_at_position_not_integer(position: Any) -> None:
    """Test indexing with a value that isn't an integer position."""
    with pytest.raises(TypeError, match="integer"):
        Interval(1, 5).at(position)

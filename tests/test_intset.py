import pytest

from workbook.intset import IntSet


def test_example_one():
    x, y = IntSet(), IntSet()
    x.add(1)
    x.add(144)
    x.add(9)
    assert str(x) == "{1 9 144}"

    y.add(9)
    y.add(42)
    assert str(y) == "{9 42}"

    x.union_with(y)
    assert str(x) == "{1 9 42 144}"

    assert (x.has(9), x.has(123)) == (True, False)


def test_example_two():
    x = IntSet()
    for value in (1, 144, 9, 42):
        x.add(value)
    assert str(x) == "{1 9 42 144}"
    assert x.words == (4398046511618, 0, 65536)


def test_empty_set():
    s = IntSet()
    assert str(s) == "{}"
    assert not s.has(0)
    assert list(s) == []


def test_add_is_idempotent():
    s = IntSet()
    s.add(5)
    s.add(5)
    assert list(s) == [5]


def test_negative_values():
    s = IntSet()
    assert not s.has(-1)
    with pytest.raises(ValueError):
        s.add(-1)


def test_union_with_longer_set():
    small, big = IntSet(), IntSet()
    small.add(3)
    big.add(200)
    small.union_with(big)
    assert list(small) == [3, 200]
    assert list(big) == [200]


def test_contains_and_iteration_sorted():
    s = IntSet()
    for value in (70, 0, 63, 64):
        s.add(value)
    assert list(s) == sorted([70, 0, 63, 64])
    assert 63 in s
    assert 62 not in s
import pytest

from shardrouter.listops import (
    clean_list,
    different_list,
    inter_list,
    make_list,
    union_list,
)


@pytest.mark.parametrize(
    "l1, l2, expected",
    [
        ([1, 2, 3], [2], [2]),
        ([1, 2, 3], [2, 3], [2, 3]),
        ([1, 2, 4], [2, 3], [2]),
        ([1, 2, 4], [], []),
        ([], [1, 2], []),
    ],
)
def test_inter_list(l1, l2, expected):
    assert inter_list(l1, l2) == expected


@pytest.mark.parametrize(
    "l1, l2, expected",
    [
        ([1, 2, 3], [2], [1, 2, 3]),
        ([1, 2, 4], [3], [1, 2, 3, 4]),
        ([1, 2, 3], [2, 3, 4], [1, 2, 3, 4]),
        ([1, 2, 3], [], [1, 2, 3]),
        ([], [4, 5], [4, 5]),
    ],
)
def test_union_list(l1, l2, expected):
    assert union_list(l1, l2) == expected


@pytest.mark.parametrize(
    "l1, l2, expected",
    [
        ([1, 2, 3, 4], [2], [1, 3, 4]),
        ([1, 2, 3, 4], [], [1, 2, 3, 4]),
        ([1, 2, 3, 4], [1, 3, 5], [2, 4]),
        ([1, 2, 3], [1, 3, 5, 6], [2]),
        ([1, 2, 3, 4], [2, 3], [1, 4]),
        ([], [1, 2], []),
    ],
)
def test_different_list(l1, l2, expected):
    assert different_list(l1, l2) == expected


def test_clean_list_removes_duplicates():
    assert clean_list([1, 2, 2, 1, 5, 3, 5, 2]) == [1, 2, 3, 5]


def test_clean_list_empty():
    assert clean_list([]) == []


def test_make_list():
    assert make_list(2, 5) == [2, 3, 4]
    assert make_list(0, 12) == list(range(12))


def test_make_list_empty_range():
    assert make_list(3, 3) == []


def test_make_list_rejects_reversed_range():
    with pytest.raises(ValueError):
        make_list(5, 2)


def test_union_does_not_alias_inputs():
    l1 = [1, 2]
    result = union_list(l1, [])
    result.append(9)
    assert l1 == [1, 2]


def test_union_and_difference_invariant():
    l1 = [0, 3, 5, 7, 10]
    l2 = [1, 3, 7, 8]
    union = union_list(l1, l2)
    assert union == sorted(set(l1) | set(l2))
    assert different_list(union, l2) == different_list(l1, l2)
    assert inter_list(union, l1) == l1
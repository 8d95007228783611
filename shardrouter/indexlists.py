"""Slices of a sorted list of sub-table indexes, bounded by index values.

Date-sharded rules number their sub-tables by date (``2016``, ``201605``,
``20160507``), so a comparison on the sharding key selects a contiguous run
of those numbers.  Each function here returns an empty list when a bound is
not one of the indexes.
"""

from __future__ import annotations

__all__ = [
    "make_le_list",
    "make_ge_list",
    "make_lt_list",
    "make_gt_list",
    "make_between_list",
]


def _position(value: int, indexes: list[int]) -> int | None:
    for position, index in enumerate(indexes):
        if index == value:
            return position
    return None


def make_le_list(value: int, indexes: list[int]) -> list[int]:
    """Return the indexes up to and including ``value``.

    For ``2016`` and ``[2015, 2016, 2017]`` the result is ``[2015, 2016]``.
    """
    position = _position(value, indexes)
    return [] if position is None else list(indexes[: position + 1])


def make_ge_list(value: int, indexes: list[int]) -> list[int]:
    """Return the indexes from ``value`` onwards.

    For ``2016`` and ``[2015, 2016, 2017, 2018]`` the result is
    ``[2016, 2017, 2018]``.
    """
    position = _position(value, indexes)
    return [] if position is None else list(indexes[position:])


def make_lt_list(value: int, indexes: list[int]) -> list[int]:
    """Return the indexes before ``value``.

    For ``2016`` and ``[2015, 2016, 2017, 2018]`` the result is ``[2015]``.
    """
    position = _position(value, indexes)
    return [] if position is None else list(indexes[:position])


def make_gt_list(value: int, indexes: list[int]) -> list[int]:
    """Return the indexes after ``value``.

    For ``2016`` and ``[2015, 2016, 2017, 2018]`` the result is
    ``[2017, 2018]``.
    """
    position = _position(value, indexes)
    return [] if position is None else list(indexes[position + 1 :])


def make_between_list(start: int, end: int, indexes: list[int]) -> list[int]:
    """Return the indexes from ``start`` to ``end`` inclusive.

    The bounds may be given in either order.  For ``2016``, ``2017`` and
    ``[2015, 2016, 2017, 2018]`` the result is ``[2016, 2017]``.
    """
    if end < start:
        start, end = end, start
    start_position: int | None = None
    for position, index in enumerate(indexes):
        if index == start:
            start_position = position
        if index == end and start_position is not None:
            return list(indexes[start_position : position + 1])
    return []
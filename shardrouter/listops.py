"""Set operations on sorted lists of sub-table and node indexes."""

from __future__ import annotations

__all__ = [
    "make_list",
    "inter_list",
    "union_list",
    "different_list",
    "clean_list",
]


def make_list(start: int, end: int) -> list[int]:
    """Return the consecutive indexes ``start, start + 1, ..., end - 1``."""
    if end < start:
        raise ValueError(f"invalid index range: end {end} is before start {start}")
    return list(range(start, end))


def inter_list(l1: list[int], l2: list[int]) -> list[int]:
    """Return the intersection of two sorted lists, keeping the order."""
    if not l1 or not l2:
        return []
    result: list[int] = []
    i = j = 0
    while i < len(l1) and j < len(l2):
        left, right = l1[i], l2[j]
        if left == right:
            result.append(left)
            i += 1
            j += 1
        elif left < right:
            i += 1
        else:
            j += 1
    return result


def union_list(l1: list[int], l2: list[int]) -> list[int]:
    """Return the sorted union of two sorted lists."""
    if not l1:
        return list(l2)
    if not l2:
        return list(l1)
    result: list[int] = []
    i = j = 0
    while i < len(l1) and j < len(l2):
        left, right = l1[i], l2[j]
        if left < right:
            result.append(left)
            i += 1
        elif left > right:
            result.append(right)
            j += 1
        else:
            result.append(left)
            i += 1
            j += 1
    if i != len(l1):
        result.extend(l1[i:])
    elif j != len(l2):
        result.extend(l2[j:])
    return result


def different_list(l1: list[int], l2: list[int]) -> list[int]:
    """Return the items of sorted ``l1`` that are not in sorted ``l2``."""
    if not l1:
        return []
    if not l2:
        return list(l1)
    result: list[int] = []
    i = j = 0
    while i < len(l1) and j < len(l2):
        left, right = l1[i], l2[j]
        if left < right:
            result.append(left)
            i += 1
        elif left > right:
            j += 1
        else:
            i += 1
            j += 1
    result.extend(l1[i:])
    return result


def clean_list(values) -> list[int]:
    """Return the distinct values, in ascending order."""
    return sorted(set(values))
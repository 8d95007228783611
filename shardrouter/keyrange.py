"""Numeric key ranges and date-range expansion for sharding rules."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta

__all__ = [
    "MIN_NUM_KEY",
    "MAX_NUM_KEY",
    "RoutingError",
    "DateRangeError",
    "NumKeyRange",
    "parse_num_sharding",
    "parse_day_range",
    "parse_month_range",
    "parse_year_range",
]

MIN_NUM_KEY = -(2**63)
MAX_NUM_KEY = 2**63 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_DIGITS_RE = re.compile(r"[0-9]+")


class RoutingError(Exception):
    """Base class for sharding and routing errors."""


class DateRangeError(RoutingError, ValueError):
    """A date range in a sharding rule is malformed."""


@dataclass(frozen=True)
class NumKeyRange:
    """The half-open range ``[start, end)``; an end of MAX_NUM_KEY is unbounded."""

    start: int
    end: int

    def map_key(self) -> str:
        return f"{self.start}-{self.end}"

    def contains(self, value: int) -> bool:
        return self.start <= value and (self.end == MAX_NUM_KEY or value < self.end)

    def __str__(self) -> str:
        return f"{{Start: {self.start}, End: {self.end}}}"


def parse_num_sharding(locations, table_row_limit: int) -> list[NumKeyRange]:
    """Give every sub-table a consecutive range of ``table_row_limit`` keys."""
    table_count = sum(locations)
    return [
        NumKeyRange(i * table_row_limit, (i + 1) * table_row_limit)
        for i in range(table_count)
    ]


def _atoi(text: str, source: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise DateRangeError(f"invalid number {text!r} in date range {source!r}")
    return int(text)


def _split_range(date_range: str, length: int, check_length: bool = True):
    """Split ``a-b`` into an ordered pair, or return a single validated value."""
    parts = date_range.split("-", 1)
    if len(parts) == 1:
        if len(parts[0]) != length:
            raise DateRangeError(f"date range {date_range!r} is illegal")
        return _atoi(parts[0], date_range), None
    first, second = parts
    if check_length and (len(first) != length or len(second) != length):
        raise DateRangeError(f"date range {date_range!r} is illegal")
    if second < first:
        first, second = second, first
    return first, second


def _parse_day(text: str, source: str) -> date:
    if not _DIGITS_RE.fullmatch(text):
        raise DateRangeError(f"invalid date {text!r} in date range {source!r}")
    try:
        return datetime.strptime(text, "%Y%m%d").date()
    except ValueError as exc:
        raise DateRangeError(f"invalid date {text!r} in date range {source!r}") from exc


def parse_day_range(date_range: str) -> list[int]:
    """Expand ``YYYYMMDD-YYYYMMDD`` into the ordered list of day numbers."""
    first, second = _split_range(date_range, 8)
    if second is None:
        return [first]
    begin = _parse_day(first, date_range)
    end = _parse_day(second, date_range)
    days = (end - begin).days
    return [
        int((begin + timedelta(days=offset)).strftime("%Y%m%d"))
        for offset in range(days + 1)
    ]


def parse_month_range(date_range: str) -> list[int]:
    """Expand ``YYYYMM-YYYYMM`` into the ordered list of month numbers."""
    first, second = _split_range(date_range, 6)
    if second is None:
        return [first]
    year = _atoi(first[:4], date_range)
    month = _atoi(first[4:], date_range)
    end_year = _atoi(second[:4], date_range)
    end_month = _atoi(second[4:], date_range)

    count = (end_year - year) * 12 + end_month - month + 1
    months = []
    for _ in range(count):
        if month > 12:
            month %= 12
            year += 1
        months.append(year * 100 + month)
        month += 1
    return months


def parse_year_range(date_range: str) -> list[int]:
    """Expand ``YYYY-YYYY`` into the ordered list of years."""
    first, second = _split_range(date_range, 4, check_length=False)
    if second is None:
        return [first]
    begin = _atoi(first, date_range)
    end = _atoi(second, date_range)
    return list(range(begin, end + 1))
"""Shard functions: map a sharding key to a sub-table index."""

from __future__ import annotations

import re
import struct
import zlib
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, tzinfo

from shardrouter.keyrange import NumKeyRange, RoutingError

__all__ = [
    "ShardKeyError",
    "KeyOutOfRangeError",
    "encode_value",
    "hash_value",
    "num_value",
    "Shard",
    "HashShard",
    "NumRangeShard",
    "DateYearShard",
    "DateMonthShard",
    "DateDayShard",
    "DefaultShard",
]

_UINT64_MASK = (1 << 64) - 1
_UINT_RE = re.compile(r"[0-9]+")
_INT_RE = re.compile(r"[+-]?[0-9]+")
_DATE_FORMAT_LEN = len("2006-01-02")


class ShardKeyError(RoutingError, ValueError):
    """A sharding key has an unexpected type or format."""


class KeyOutOfRangeError(RoutingError, LookupError):
    """A sharding key falls outside every configured range."""


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _to_uint64(value: int) -> int:
    return value & _UINT64_MASK


def _to_int64(value: int) -> int:
    value &= _UINT64_MASK
    return value - (1 << 64) if value >= (1 << 63) else value


def _unexpected(value) -> ShardKeyError:
    return ShardKeyError(f"Unexpected key variable type {type(value).__name__}")


def encode_value(value) -> bytes:
    """Encode a key as bytes: integers as 8 big-endian bytes, text as UTF-8."""
    if _is_int(value):
        return struct.pack(">Q", _to_uint64(value))
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise _unexpected(value)


def _parse_uint64(text: str) -> int | None:
    if _UINT_RE.fullmatch(text):
        number = int(text)
        if number <= _UINT64_MASK:
            return number
    return None


def _parse_int64(text: str) -> int:
    if _INT_RE.fullmatch(text):
        number = int(text)
        if -(1 << 63) <= number < (1 << 63):
            return number
    raise ShardKeyError(f"invalid num format {text!r}")


def hash_value(value) -> int:
    """Return the unsigned 64-bit hash of a key.

    Integers hash to themselves; decimal text hashes to its number; other
    text and bytes hash to their CRC-32 checksum.
    """
    if _is_int(value):
        return _to_uint64(value)
    if isinstance(value, str):
        number = _parse_uint64(value)
        if number is not None:
            return number
        return zlib.crc32(value.encode("utf-8"))
    if isinstance(value, (bytes, bytearray)):
        return zlib.crc32(bytes(value))
    raise _unexpected(value)


def num_value(value) -> int:
    """Return a key as a signed 64-bit integer."""
    if _is_int(value):
        return _to_int64(value)
    if isinstance(value, str):
        return _parse_int64(value)
    if isinstance(value, (bytes, bytearray)):
        try:
            text = bytes(value).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ShardKeyError(f"invalid num format {value!r}") from exc
        return _parse_int64(text)
    raise _unexpected(value)


class Shard(ABC):
    """Maps a sharding key to a sub-table index."""

    @abstractmethod
    def find_for_key(self, key) -> int:
        """Return the sub-table index for ``key``."""


@dataclass
class HashShard(Shard):
    """Distributes keys by hash modulo the number of sub-tables."""

    shard_num: int

    def find_for_key(self, key) -> int:
        return hash_value(key) % self.shard_num


@dataclass
class NumRangeShard(Shard):
    """Distributes numeric keys by consecutive half-open ranges."""

    shards: list[NumKeyRange] = field(default_factory=list)

    def find_for_key(self, key) -> int:
        value = num_value(key)
        for index, key_range in enumerate(self.shards):
            if key_range.contains(value):
                return index
        raise KeyOutOfRangeError(f"key {value} is out of range")

    def equal_start(self, key, index: int) -> bool:
        return self.shards[index].start == num_value(key)

    def equal_stop(self, key, index: int) -> bool:
        return self.shards[index].end == num_value(key)


def _from_timestamp(value: int, tz: tzinfo | None) -> datetime:
    try:
        return datetime.fromtimestamp(_to_int64(value), tz)
    except (OverflowError, OSError, ValueError) as exc:
        raise ShardKeyError(f"invalid timestamp {value}") from exc


def _atoi(text: str, source: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ShardKeyError(f"invalid date format {source}")
    return int(text)


@dataclass
class DateYearShard(Shard):
    """Shards by year, from ``YYYY...`` text or a Unix timestamp.

    Timestamps are read in ``tz``, or in local time when it is None.
    """

    tz: tzinfo | None = None

    def find_for_key(self, key) -> int:
        if _is_int(key):
            return _from_timestamp(key, self.tz).year
        if isinstance(key, str):
            return _atoi(key[:4], key)
        raise _unexpected(key)


@dataclass
class DateMonthShard(Shard):
    """Shards by month as ``YYYYMM``, from ``YYYY-MM-DD...`` text or a timestamp."""

    tz: tzinfo | None = None

    def find_for_key(self, key) -> int:
        if _is_int(key):
            moment = _from_timestamp(key, self.tz)
            return moment.year * 100 + moment.month
        if isinstance(key, str):
            if len(key) < _DATE_FORMAT_LEN:
                raise ShardKeyError(f"invalid date format {key}")
            return _atoi(key[:4] + key[5:7], key)
        raise _unexpected(key)


@dataclass
class DateDayShard(Shard):
    """Shards by day as ``YYYYMMDD``, from ``YYYY-MM-DD...`` text or a timestamp."""

    tz: tzinfo | None = None

    def find_for_key(self, key) -> int:
        if _is_int(key):
            moment = _from_timestamp(key, self.tz)
            return moment.year * 10000 + moment.month * 100 + moment.day
        if isinstance(key, str):
            if len(key) < _DATE_FORMAT_LEN:
                raise ShardKeyError(f"invalid date format {key}")
            return _atoi(key[:4] + key[5:7] + key[8:10], key)
        raise _unexpected(key)


class DefaultShard(Shard):
    """Sends every key to sub-table 0."""

    def find_for_key(self, key) -> int:
        return 0
"""Sharding rules: how one table's rows are spread over sub-tables and nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from shardrouter.keyrange import (
    RoutingError,
    parse_day_range,
    parse_month_range,
    parse_num_sharding,
    parse_year_range,
)
from shardrouter.shard import (
    DateDayShard,
    DateMonthShard,
    DateYearShard,
    DefaultShard,
    HashShard,
    NumRangeShard,
    Shard,
)

__all__ = [
    "RuleType",
    "ConfigError",
    "UpdateShardKeyError",
    "ShardConfig",
    "Rule",
    "new_default_rule",
    "parse_rule",
]


class RuleType(str, Enum):
    """The kinds of sharding rule."""

    DEFAULT = "default"
    HASH = "hash"
    RANGE = "range"
    DATE_YEAR = "date_year"
    DATE_MONTH = "date_month"
    DATE_DAY = "date_day"


class ConfigError(RoutingError, ValueError):
    """A sharding configuration is inconsistent."""


class UpdateShardKeyError(RoutingError):
    """An update would change the value of the sharding key."""


@dataclass
class ShardConfig:
    """The configuration of one sharded table."""

    db: str
    table: str
    key: str
    type: str
    nodes: list[str] = field(default_factory=list)
    locations: list[int] = field(default_factory=list)
    table_row_limit: int = 0
    date_range: list[str] = field(default_factory=list)


def _coerce_type(value):
    try:
        return RuleType(value)
    except ValueError:
        return value


@dataclass
class Rule:
    """A table's sharding rule.

    ``sub_table_indexes`` holds every sub-table index in ascending order and
    ``table_to_node`` maps each of them to the position of its node.
    """

    type: RuleType | str
    nodes: list[str]
    shard: Shard
    db: str = ""
    table: str = ""
    key: str = ""
    sub_table_indexes: list[int] = field(default_factory=list)
    table_to_node: dict[int, int] = field(default_factory=dict)

    def find_table_index(self, key) -> int:
        """Return the sub-table index that ``key`` belongs to."""
        return self.shard.find_for_key(key)

    def find_node_index(self, key) -> int:
        """Return the position in ``nodes`` of the node holding ``key``."""
        return self.table_to_node.get(self.find_table_index(key), 0)

    def find_node(self, key) -> str:
        """Return the name of the node holding ``key``."""
        return self.nodes[self.find_node_index(key)]

    def check_update_columns(self, column_names) -> None:
        """Raise UpdateShardKeyError if an assigned column is the sharding key."""
        if self.type == RuleType.DEFAULT or len(self.nodes) == 1:
            return
        for name in column_names:
            if name == self.key:
                raise UpdateShardKeyError(
                    f"sharding key {self.key!r} of table {self.table!r} cannot be updated"
                )


def new_default_rule(node: str) -> Rule:
    """Return the rule that sends every table without its own rule to ``node``."""
    return Rule(type=RuleType.DEFAULT, nodes=[node], shard=DefaultShard())


_DATE_PARSERS = {
    RuleType.DATE_DAY: parse_day_range,
    RuleType.DATE_MONTH: parse_month_range,
    RuleType.DATE_YEAR: parse_year_range,
}


def _fill_located(rule: Rule, config: ShardConfig) -> None:
    if len(config.locations) != len(rule.nodes):
        raise ConfigError("the count of locations must equal the count of nodes")
    next_index = 0
    for node_index, count in enumerate(config.locations):
        for table_index in range(next_index, next_index + count):
            rule.sub_table_indexes.append(table_index)
            rule.table_to_node[table_index] = node_index
        next_index += count


def _fill_dated(rule: Rule, config: ShardConfig, parse) -> None:
    if len(config.date_range) != len(rule.nodes):
        raise ConfigError("the count of date ranges must equal the count of nodes")
    for node_index, date_range in enumerate(config.date_range):
        numbers = parse(date_range)
        if rule.sub_table_indexes and rule.sub_table_indexes[-1] >= numbers[0]:
            raise ConfigError(
                f"date range {date_range!r} overlaps or precedes the previous range"
            )
        for number in numbers:
            rule.sub_table_indexes.append(number)
            rule.table_to_node[number] = node_index


def _make_shard(rule: Rule, config: ShardConfig) -> Shard:
    if rule.type == RuleType.HASH:
        return HashShard(shard_num=len(rule.table_to_node))
    if rule.type == RuleType.RANGE:
        ranges = parse_num_sharding(config.locations, config.table_row_limit)
        if len(ranges) != len(rule.table_to_node):
            raise ConfigError(
                f"range space {len(ranges)} not equal tables {len(rule.table_to_node)}"
            )
        return NumRangeShard(shards=ranges)
    if rule.type == RuleType.DATE_DAY:
        return DateDayShard()
    if rule.type == RuleType.DATE_MONTH:
        return DateMonthShard()
    if rule.type == RuleType.DATE_YEAR:
        return DateYearShard()
    return DefaultShard()


def parse_rule(config: ShardConfig) -> Rule:
    """Build the rule a shard configuration describes."""
    rule = Rule(
        type=_coerce_type(config.type),
        nodes=list(config.nodes),
        shard=DefaultShard(),
        db=config.db,
        table=config.table,
        key=config.key.lower(),
    )
    if rule.type in (RuleType.HASH, RuleType.RANGE):
        _fill_located(rule, config)
    elif isinstance(rule.type, RuleType) and rule.type in _DATE_PARSERS:
        _fill_dated(rule, config, _DATE_PARSERS[rule.type])
    rule.shard = _make_shard(rule, config)
    return rule
"""The router: every table's sharding rule, looked up by database and table."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from shardrouter.rules import (
    ConfigError,
    Rule,
    RuleType,
    ShardConfig,
    new_default_rule,
    parse_rule,
)

__all__ = ["SchemaConfig", "Router", "build_router"]


@dataclass
class SchemaConfig:
    """The configuration of one schema: its nodes, default node and shard rules."""

    nodes: list[str]
    default: str
    shard_rule: list[ShardConfig] = field(default_factory=list)


@dataclass
class Router:
    """Holds the sharding rule of every sharded table, by database and table.

    Tables without a rule of their own fall back to ``default_rule``.
    """

    default_rule: Rule
    nodes: list[str] = field(default_factory=list)
    rules: dict[str, dict[str, Rule]] = field(default_factory=dict)

    def get_rule(self, db: str, table: str) -> Rule:
        """Return the rule for ``table`` in ``db``.

        ``table`` may be qualified as ``db.table``, with or without backticks,
        in which case its own database takes precedence over ``db``.
        """
        parts = table.split(".")
        if len(parts) == 2:
            db = parts[0].strip("`")
            table = parts[1].strip("`")
        rule = self.rules.get(db, {}).get(table)
        if rule is None:
            return replace(self.default_rule, db=db)
        return rule


def build_router(schema: SchemaConfig) -> Router:
    """Build a router from a schema configuration.

    Raises ConfigError when a node is not in the schema's nodes, when a rule
    is of the default type, or when a table has more than one rule.
    """
    if schema.default not in schema.nodes:
        raise ConfigError(f"default node[{schema.default}] not in the nodes list")

    router = Router(
        default_rule=new_default_rule(schema.default),
        nodes=list(schema.nodes),
    )

    for shard in schema.shard_rule:
        for node in shard.nodes:
            if node not in router.nodes:
                raise ConfigError(
                    f"shard table[{shard.table}] node[{node}] not in the "
                    f"schema.nodes list:[{','.join(shard.nodes)}]"
                )
        rule = parse_rule(shard)
        if rule.type == RuleType.DEFAULT:
            raise ConfigError("[default-rule] duplicate, must only one")

        tables = router.rules.setdefault(rule.db, {})
        if rule.table in tables:
            raise ConfigError(f"table {rule.table} rule in {rule.db} duplicate")
        tables[rule.table] = rule

    return router
# shardrouter

Sharding rules and query fingerprints for MySQL tables that are split into
numbered sub-tables spread over several nodes.

The package needs only the standard library and supports Python 3.10 and
later.

## What it does

- **Query fingerprints.** `shardrouter.fingerprint.fingerprint(query,
  replace_numbers_in_words=False)` returns the canonical form of a SQL
  statement: literals become `?`, whitespace is collapsed, comments are
  removed, the text is lowercased, `IN (...)` and `VALUES (...)` lists fold
  into `(?+)`, and `ASC` after `ORDER BY` is dropped.
- **Shard functions.** `shardrouter.shard` maps a sharding key to a sub-table
  index: `HashShard` by hash modulo the table count, `NumRangeShard` by
  half-open numeric ranges, `DateYearShard`, `DateMonthShard` and
  `DateDayShard` by date text (`YYYY-MM-DD...`) or a Unix timestamp (read in
  the shard's `tz`, or local time when it is `None`), and `DefaultShard`
  always to 0. The helpers `encode_value`, `hash_value` and `num_value`
  convert keys.
- **Key ranges.** `shardrouter.keyrange` has `NumKeyRange`,
  `parse_num_sharding`, and `parse_year_range`, `parse_month_range` and
  `parse_day_range`, which expand expressions such as `2014-2017`,
  `201602-201610` or `20160227-20160304` (the bounds may be in either order).
- **Index lists.** `shardrouter.listops` (`make_list`, `inter_list`,
  `union_list`, `different_list`, `clean_list`) and `shardrouter.indexlists`
  (`make_le_list`, `make_ge_list`, `make_lt_list`, `make_gt_list`,
  `make_between_list`) work on sorted lists of sub-table indexes.
- **Rules and routers.** `shardrouter.rules.parse_rule` turns a `ShardConfig`
  into a `Rule`, whose `find_table_index`, `find_node_index` and `find_node`
  locate a key and whose `check_update_columns` refuses assignments to the
  sharding key. `shardrouter.router.build_router` turns a `SchemaConfig`
  into a `Router`; `Router.get_rule(db, table)` returns a table's rule,
  accepting `db.table` names, and falls back to the default node's rule.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

### Fingerprints

```python
from shardrouter.fingerprint import fingerprint

fingerprint("SELECT c FROM t WHERE id=1")
# 'select c from t where id=?'

fingerprint("select * from foo where a in (5) and b in (5, 8,9 ,9 , 10)")
# 'select * from foo where a in(?+) and b in(?+)'

fingerprint("SELECT c FROM org235.t WHERE id=0xdeadbeaf", replace_numbers_in_words=True)
# 'select c from org?.t where id=?'
```

### Routing keys

```python
from shardrouter.router import SchemaConfig, build_router
from shardrouter.rules import ShardConfig

schema = SchemaConfig(
    nodes=["node1", "node2", "node3"],
    default="node1",
    shard_rule=[
        ShardConfig(db="shop", table="orders", key="id", type="hash",
                    nodes=["node1", "node2", "node3"], locations=[4, 4, 4]),
        ShardConfig(db="shop", table="items", key="id", type="range",
                    nodes=["node1", "node2", "node3"], locations=[4, 4, 4],
                    table_row_limit=10000),
    ],
)
router = build_router(schema)

router.get_rule("shop", "orders").find_node(5)    # 'node2' (sub-table 5)
router.get_rule("shop", "items").find_node(9999)  # 'node1' (sub-table 0)
router.get_rule("shop", "other").find_node(42)    # 'node1' (default rule)
```

### Date ranges and index lists

```python
from shardrouter.keyrange import parse_month_range, parse_year_range
from shardrouter.listops import different_list, inter_list, union_list
from shardrouter.indexlists import make_le_list

parse_year_range("2017-2013")        # [2013, 2014, 2015, 2016, 2017]
parse_month_range("201603-201511")   # [201511, 201512, 201601, 201602, 201603]

inter_list([1, 2, 3], [2, 3])        # [2, 3]
union_list([1, 2, 4], [3])           # [1, 2, 3, 4]
different_list([1, 2, 3, 4], [2])    # [1, 3, 4]
make_le_list(20150822, [20150802, 20150812, 20150822, 20150823])
# [20150802, 20150812, 20150822]
```

## Rule types

| type         | sub-table indexes                           | key read as        |
|--------------|---------------------------------------------|--------------------|
| `hash`       | `0 .. n-1` from the per-node `locations`    | hashed value       |
| `range`      | `0 .. n-1`, each `table_row_limit` keys wide | integer           |
| `date_year`  | years, such as `2012`                       | date or timestamp  |
| `date_month` | year and month, such as `201512`            | date or timestamp  |
| `date_day`   | full dates, such as `20151201`              | date or timestamp  |
| `default`    | none; everything goes to the default node   | ignored            |

For date rules each node gets one entry in `date_range`, and the ranges must
increase from node to node.

## Errors

All errors derive from `shardrouter.keyrange.RoutingError`:
`DateRangeError` for malformed date ranges, `ShardKeyError` and
`KeyOutOfRangeError` for keys that cannot be placed, `ConfigError` for
inconsistent configurations, and `UpdateShardKeyError` from
`Rule.check_update_columns`.

## What it does not do

The package does not parse SQL statements, build routing plans from `WHERE`
clauses, or rewrite queries for each sub-table; it supplies the rules, shard
functions and index-list operations such a planner would use. It has no
proxy server, no configuration-file loader and no command-line tool, and it
does not compute digests of fingerprints.
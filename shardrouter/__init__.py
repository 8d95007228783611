"""Sharding rules, key routing, index-list operations and SQL query fingerprints."""

__version__ = "0.1.0"

__all__ = [
    "fingerprint",
    "indexlists",
    "keyrange",
    "listops",
    "router",
    "rules",
    "shard",
]
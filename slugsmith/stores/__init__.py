"""Stores backing slugged records."""

from slugsmith.stores.base import RowStore, SlugStore, row_matches
from slugsmith.stores.json_store import JsonFileStore
from slugsmith.stores.memory import MemoryStore

__all__ = [
    "SlugStore",
    "RowStore",
    "row_matches",
    "MemoryStore",
    "JsonFileStore",
]

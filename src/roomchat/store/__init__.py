"""Key-value store layer: operation descriptors and backends."""

from .base import (
    AttributeNotExists,
    Item,
    KeyValueStore,
    Page,
    PutItemOperation,
    QueryOperation,
    ScanOperation,
    StoreError,
    StoreOperation,
    Table,
)
from .factory import create_store
from .memory import MemoryStore

__all__ = [
    "AttributeNotExists",
    "Item",
    "KeyValueStore",
    "MemoryStore",
    "Page",
    "PutItemOperation",
    "QueryOperation",
    "ScanOperation",
    "StoreError",
    "StoreOperation",
    "Table",
    "create_store",
]

"""In-process key-value store for local development and tests."""

from __future__ import annotations

import copy

from ..logging import get_logger
from .base import (
    Item,
    KeyValueStore,
    Page,
    PutItemOperation,
    QueryOperation,
    ScanOperation,
    StoreError,
    Table,
    decode_cursor,
    encode_cursor,
)

logger = get_logger(__name__)

PRIMARY_KEY = "id"


class MemoryStore(KeyValueStore):
    """
    Dictionary-backed store with the same observable contract as DynamoDB.

    Scans return records in insertion order, queries sort by the index sort
    key (ties broken by primary key). The condition check and the write in
    ``put_item`` run without an intervening await, so on one event loop two
    concurrent creations of the same key cannot both succeed.
    """

    def __init__(self) -> None:
        self._tables: dict[Table, dict[str, Item]] = {table: {} for table in Table}

    async def query(self, operation: QueryOperation) -> Page:
        records = [
            item
            for item in self._tables[operation.table].values()
            if item.get(operation.partition_key) == operation.partition_value
        ]

        sort_key = operation.sort_key
        if sort_key:
            records.sort(
                key=lambda item: (str(item.get(sort_key, "")), str(item[PRIMARY_KEY])),
                reverse=not operation.scan_forward,
            )
        elif not operation.scan_forward:
            records.reverse()

        key_attributes = [PRIMARY_KEY, operation.partition_key]
        if sort_key:
            key_attributes.append(sort_key)

        return self._paginate(records, operation.limit, operation.next_token, key_attributes)

    async def scan(self, operation: ScanOperation) -> Page:
        records = list(self._tables[operation.table].values())
        return self._paginate(records, operation.limit, operation.next_token, [PRIMARY_KEY])

    async def put_item(self, operation: PutItemOperation) -> Item:
        item = copy.deepcopy(operation.item)
        if PRIMARY_KEY not in item:
            raise StoreError(
                "One or more parameter values were invalid: Missing the key id in the item",
                "ValidationException",
            )

        key = str(item[PRIMARY_KEY])
        # No await between the condition check and the write
        table = self._tables[operation.table]
        if operation.condition is not None:
            existing = table.get(key)
            if existing is not None and operation.condition.attribute in existing:
                logger.info(
                    "Conditional put rejected",
                    table=operation.table.value,
                    key=key,
                )
                raise StoreError(
                    "The conditional request failed", "ConditionalCheckFailedException"
                )
        table[key] = item

        return copy.deepcopy(item)

    def count(self, table: Table) -> int:
        return len(self._tables[table])

    def _paginate(
        self,
        records: list[Item],
        limit: int | None,
        next_token: str | None,
        key_attributes: list[str],
    ) -> Page:
        if limit is not None and limit < 1:
            raise StoreError(
                "1 validation error detected: Value at 'limit' failed to satisfy constraint: "
                "Member must have value greater than or equal to 1",
                "ValidationException",
            )

        start = 0
        if next_token:
            last_key = decode_cursor(next_token)
            last_id = last_key.get(PRIMARY_KEY)
            positions = [i for i, item in enumerate(records) if item[PRIMARY_KEY] == last_id]
            if not positions:
                raise StoreError("Invalid nextToken", "ValidationException")
            start = positions[0] + 1

        end = len(records) if limit is None else start + limit
        page_items = records[start:end]

        token = None
        if end < len(records) and page_items:
            last = page_items[-1]
            token = encode_cursor({attr: last[attr] for attr in key_attributes if attr in last})

        return Page(items=copy.deepcopy(page_items), next_token=token)

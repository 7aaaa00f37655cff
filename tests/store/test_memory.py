"""Tests for the in-memory key-value store."""

import asyncio

import pytest
import pytest_asyncio

from roomchat.store.base import (
    AttributeNotExists,
    PutItemOperation,
    QueryOperation,
    ScanOperation,
    StoreError,
    Table,
)
from roomchat.store.memory import MemoryStore


def put_room(room_id: str, **attrs) -> PutItemOperation:
    return PutItemOperation(
        table=Table.ROOMS,
        key={"id": room_id},
        attribute_values=attrs,
        condition=AttributeNotExists("id"),
    )


def put_message(message_id: str, room_id: str, created_at: str) -> PutItemOperation:
    return PutItemOperation(
        table=Table.MESSAGES,
        key={"id": message_id},
        attribute_values={"roomId": room_id, "createdAt": created_at},
        condition=AttributeNotExists("id"),
    )


def room_query(room_id: str, **kwargs) -> QueryOperation:
    return QueryOperation(
        table=Table.MESSAGES,
        index="messages-by-room-id",
        partition_key="roomId",
        partition_value=room_id,
        sort_key="createdAt",
        **kwargs,
    )


class TestPutItem:
    """Tests for conditional and unconditional puts."""

    @pytest.mark.asyncio
    async def test_put_returns_copy_of_item(self, store):
        item = await store.execute(put_room("r1", name="general"))

        assert item == {"id": "r1", "name": "general"}
        item["name"] = "changed"
        page = await store.execute(ScanOperation(table=Table.ROOMS))
        assert page.items == [{"id": "r1", "name": "general"}]

    @pytest.mark.asyncio
    async def test_conditional_put_rejects_existing_key(self, store):
        await store.execute(put_room("r1", name="general"))

        with pytest.raises(StoreError) as exc_info:
            await store.execute(put_room("r1", name="random"))

        assert exc_info.value.error_type == "ConditionalCheckFailedException"
        page = await store.execute(ScanOperation(table=Table.ROOMS))
        assert page.items == [{"id": "r1", "name": "general"}]

    @pytest.mark.asyncio
    async def test_unconditional_put_overwrites(self, store):
        await store.execute(put_room("r1", name="general"))
        await store.execute(
            PutItemOperation(table=Table.ROOMS, key={"id": "r1"}, attribute_values={"name": "x"})
        )

        page = await store.execute(ScanOperation(table=Table.ROOMS))
        assert page.items == [{"id": "r1", "name": "x"}]

    @pytest.mark.asyncio
    async def test_same_key_in_different_tables(self, store):
        await store.execute(put_room("same"))
        await store.execute(put_message("same", "same", "2024-01-01T00:00:00.000Z"))

        assert store.count(Table.ROOMS) == 1
        assert store.count(Table.MESSAGES) == 1

    @pytest.mark.asyncio
    async def test_put_without_key_rejected(self, store):
        with pytest.raises(StoreError) as exc_info:
            await store.execute(
                PutItemOperation(table=Table.ROOMS, key={}, attribute_values={"name": "x"})
            )
        assert exc_info.value.error_type == "ValidationException"

    @pytest.mark.asyncio
    async def test_concurrent_conditional_puts(self, store):
        results = await asyncio.gather(
            *(store.execute(put_room("r1", attempt=i)) for i in range(5)),
            return_exceptions=True,
        )

        assert sum(1 for r in results if isinstance(r, dict)) == 1
        assert sum(1 for r in results if isinstance(r, StoreError)) == 4


class TestScan:
    """Tests for scans and their pagination."""

    @pytest.mark.asyncio
    async def test_paginates_full_collection_without_duplicates(self, store):
        for i in range(7):
            await store.execute(put_room(f"r{i}"))

        seen: list[str] = []
        token = None
        pages = 0
        while True:
            page = await store.execute(ScanOperation(table=Table.ROOMS, limit=3, next_token=token))
            pages += 1
            seen.extend(item["id"] for item in page.items)
            token = page.next_token
            if token is None:
                break

        assert seen == [f"r{i}" for i in range(7)]
        assert pages == 3

    @pytest.mark.asyncio
    async def test_exact_multiple_of_limit_has_no_trailing_token(self, store):
        for i in range(4):
            await store.execute(put_room(f"r{i}"))

        first = await store.execute(ScanOperation(table=Table.ROOMS, limit=2))
        second = await store.execute(
            ScanOperation(table=Table.ROOMS, limit=2, next_token=first.next_token)
        )

        assert first.next_token is not None
        assert [item["id"] for item in second.items] == ["r2", "r3"]
        assert second.next_token is None

    @pytest.mark.asyncio
    async def test_empty_table(self, store):
        page = await store.execute(ScanOperation(table=Table.ROOMS, limit=10))
        assert page.items == []
        assert page.next_token is None

    @pytest.mark.asyncio
    async def test_invalid_limit(self, store):
        with pytest.raises(StoreError) as exc_info:
            await store.execute(ScanOperation(table=Table.ROOMS, limit=0))
        assert exc_info.value.error_type == "ValidationException"

    @pytest.mark.asyncio
    async def test_malformed_token(self, store):
        with pytest.raises(StoreError) as exc_info:
            await store.execute(ScanOperation(table=Table.ROOMS, next_token="not a cursor!"))
        assert exc_info.value.error_type == "ValidationException"


class TestQuery:
    """Tests for secondary-index queries."""

    @pytest_asyncio.fixture
    async def populated(self) -> MemoryStore:
        store = MemoryStore()
        await store.execute(put_message("m2", "R", "2024-01-01T00:00:02.000Z"))
        await store.execute(put_message("m1", "R", "2024-01-01T00:00:01.000Z"))
        await store.execute(put_message("m3", "R", "2024-01-01T00:00:03.000Z"))
        await store.execute(put_message("x1", "other", "2024-01-01T00:00:00.000Z"))
        return store

    @pytest.mark.asyncio
    async def test_ascending(self, populated):
        page = await populated.execute(room_query("R"))
        assert [item["id"] for item in page.items] == ["m1", "m2", "m3"]

    @pytest.mark.asyncio
    async def test_descending(self, populated):
        page = await populated.execute(room_query("R", scan_forward=False))
        assert [item["id"] for item in page.items] == ["m3", "m2", "m1"]

    @pytest.mark.asyncio
    async def test_pagination_follows_direction(self, populated):
        first = await populated.execute(room_query("R", scan_forward=False, limit=2))
        second = await populated.execute(
            room_query("R", scan_forward=False, limit=2, next_token=first.next_token)
        )

        assert [item["id"] for item in first.items] == ["m3", "m2"]
        assert [item["id"] for item in second.items] == ["m1"]
        assert second.next_token is None

    @pytest.mark.asyncio
    async def test_unknown_room(self, populated):
        page = await populated.execute(room_query("missing"))
        assert page.items == []

"""Tests for DynamoDB table definitions and provisioning."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from roomchat.store.base import Table
from roomchat.store.dynamodb import DynamoDBStore
from roomchat.store.tables import create_tables, delete_tables, describe_tables, table_definitions

TABLE_NAMES = {Table.ROOMS: "test-rooms", Table.MESSAGES: "test-messages"}


def client_error(code: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, "Operation")


@pytest.fixture
def dynamo_store():
    return DynamoDBStore(table_names=TABLE_NAMES)


@pytest.fixture
def mock_client(dynamo_store):
    client = MagicMock()
    client.create_table = AsyncMock(return_value={})
    client.delete_table = AsyncMock(return_value={})
    client.describe_table = AsyncMock()
    waiter = MagicMock()
    waiter.wait = AsyncMock()
    client.get_waiter.return_value = waiter

    session = MagicMock()
    session.client.return_value.__aenter__.return_value = client

    with patch.object(dynamo_store, "_get_session", return_value=session):
        yield client


def test_table_definitions():
    definitions = table_definitions(TABLE_NAMES, "messages-by-room-id")

    rooms = definitions[Table.ROOMS]
    assert rooms["TableName"] == "test-rooms"
    assert rooms["KeySchema"] == [{"AttributeName": "id", "KeyType": "HASH"}]
    assert rooms["BillingMode"] == "PAY_PER_REQUEST"
    assert "GlobalSecondaryIndexes" not in rooms

    messages = definitions[Table.MESSAGES]
    (index,) = messages["GlobalSecondaryIndexes"]
    assert index["IndexName"] == "messages-by-room-id"
    assert index["KeySchema"] == [
        {"AttributeName": "roomId", "KeyType": "HASH"},
        {"AttributeName": "createdAt", "KeyType": "RANGE"},
    ]
    assert index["Projection"] == {"ProjectionType": "ALL"}


@pytest.mark.asyncio
async def test_create_tables_waits_for_each(dynamo_store, mock_client):
    created = await create_tables(dynamo_store, "messages-by-room-id")

    assert created == ["test-rooms", "test-messages"]
    assert mock_client.create_table.await_count == 2
    mock_client.get_waiter.assert_called_with("table_exists")


@pytest.mark.asyncio
async def test_create_tables_skips_existing(dynamo_store, mock_client):
    mock_client.create_table.side_effect = [client_error("ResourceInUseException"), {}]

    created = await create_tables(dynamo_store, "messages-by-room-id")

    assert created == ["test-messages"]


@pytest.mark.asyncio
async def test_create_tables_propagates_other_errors(dynamo_store, mock_client):
    mock_client.create_table.side_effect = client_error("AccessDeniedException")

    with pytest.raises(ClientError):
        await create_tables(dynamo_store, "messages-by-room-id")


@pytest.mark.asyncio
async def test_delete_tables_skips_missing(dynamo_store, mock_client):
    mock_client.delete_table.side_effect = [client_error("ResourceNotFoundException"), {}]

    deleted = await delete_tables(dynamo_store)

    assert deleted == ["test-messages"]
    mock_client.get_waiter.assert_called_with("table_not_exists")


@pytest.mark.asyncio
async def test_describe_tables(dynamo_store, mock_client):
    mock_client.describe_table.side_effect = [
        {"Table": {"TableStatus": "ACTIVE", "ItemCount": 3}},
        client_error("ResourceNotFoundException"),
    ]

    summary = await describe_tables(dynamo_store)

    assert summary == {
        "test-rooms": {"status": "ACTIVE", "item_count": 3, "indexes": []},
        "test-messages": {"status": "MISSING"},
    }

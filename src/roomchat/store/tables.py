"""DynamoDB table definitions and provisioning for the rooms and messages collections."""

from __future__ import annotations

from typing import Any

from botocore.exceptions import ClientError

from ..logging import get_logger
from .base import Table
from .dynamodb import DynamoDBStore

logger = get_logger(__name__)


def table_definitions(
    table_names: dict[Table, str], messages_index: str = "messages-by-room-id"
) -> dict[Table, dict[str, Any]]:
    """Build ``create_table`` parameters for every collection.

    Both tables are keyed by ``id``. Messages additionally carry a global
    secondary index ordered by ``(roomId, createdAt)``.
    """
    rooms = {
        "TableName": table_names[Table.ROOMS],
        "KeySchema": [{"AttributeName": "id", "KeyType": "HASH"}],
        "AttributeDefinitions": [{"AttributeName": "id", "AttributeType": "S"}],
        "BillingMode": "PAY_PER_REQUEST",
    }
    messages = {
        "TableName": table_names[Table.MESSAGES],
        "KeySchema": [{"AttributeName": "id", "KeyType": "HASH"}],
        "AttributeDefinitions": [
            {"AttributeName": "id", "AttributeType": "S"},
            {"AttributeName": "roomId", "AttributeType": "S"},
            {"AttributeName": "createdAt", "AttributeType": "S"},
        ],
        "GlobalSecondaryIndexes": [
            {
                "IndexName": messages_index,
                "KeySchema": [
                    {"AttributeName": "roomId", "KeyType": "HASH"},
                    {"AttributeName": "createdAt", "KeyType": "RANGE"},
                ],
                "Projection": {"ProjectionType": "ALL"},
            }
        ],
        "BillingMode": "PAY_PER_REQUEST",
    }
    return {Table.ROOMS: rooms, Table.MESSAGES: messages}


async def create_tables(store: DynamoDBStore, messages_index: str) -> list[str]:
    """Create any missing tables and wait until they are active.

    Returns:
        Names of the tables that were created by this call
    """
    created: list[str] = []
    definitions = table_definitions(store.table_names, messages_index)

    async with store.client() as client:
        for definition in definitions.values():
            name = definition["TableName"]
            try:
                await client.create_table(**definition)
            except ClientError as e:
                if e.response.get("Error", {}).get("Code") == "ResourceInUseException":
                    logger.info("Table already exists, skipping", table=name)
                    continue
                raise

            logger.info("Creating table", table=name)
            waiter = client.get_waiter("table_exists")
            await waiter.wait(TableName=name)
            logger.info("Table is active", table=name)
            created.append(name)

    return created


async def delete_tables(store: DynamoDBStore) -> list[str]:
    """Delete every table that exists; missing tables are skipped."""
    deleted: list[str] = []

    async with store.client() as client:
        for name in store.table_names.values():
            try:
                await client.delete_table(TableName=name)
            except ClientError as e:
                if e.response.get("Error", {}).get("Code") == "ResourceNotFoundException":
                    logger.info("Table does not exist, skipping", table=name)
                    continue
                raise

            waiter = client.get_waiter("table_not_exists")
            await waiter.wait(TableName=name)
            logger.info("Table deleted", table=name)
            deleted.append(name)

    return deleted


async def describe_tables(store: DynamoDBStore) -> dict[str, dict[str, Any]]:
    """Return status, item count and index names for each table."""
    summary: dict[str, dict[str, Any]] = {}

    async with store.client() as client:
        for name in store.table_names.values():
            try:
                response = await client.describe_table(TableName=name)
            except ClientError as e:
                if e.response.get("Error", {}).get("Code") == "ResourceNotFoundException":
                    summary[name] = {"status": "MISSING"}
                    continue
                raise

            table = response["Table"]
            summary[name] = {
                "status": table.get("TableStatus"),
                "item_count": table.get("ItemCount", 0),
                "indexes": [
                    index["IndexName"] for index in table.get("GlobalSecondaryIndexes", [])
                ],
            }

    return summary

"""Amazon DynamoDB store backend using aioboto3."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import aioboto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

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


def to_dynamo(value: Any) -> Any:
    """Convert Python values into types the DynamoDB resource layer accepts."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: to_dynamo(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [to_dynamo(v) for v in value]
    return value


def from_dynamo(value: Any) -> Any:
    """Convert DynamoDB resource values back into JSON-friendly Python values."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: from_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_dynamo(v) for v in value]
    if isinstance(value, set):
        return sorted(from_dynamo(v) for v in value)
    return value


class DynamoDBStore(KeyValueStore):
    """DynamoDB backend mapping each operation descriptor onto one API call."""

    def __init__(
        self,
        table_names: dict[Table, str],
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        aws_access_key_id: str | None = None,
        aws_secret_access_key: str | None = None,
    ):
        missing = [table.value for table in Table if table not in table_names]
        if missing:
            raise ValueError(f"Missing physical table names for: {', '.join(missing)}")

        self.table_names = table_names
        self.region = region
        self.endpoint_url = endpoint_url
        self.aws_access_key_id = aws_access_key_id
        self.aws_secret_access_key = aws_secret_access_key

        # Retries stay with the SDK transport; a rejected write is never retried here
        self.config = Config(
            region_name=self.region,
            retries={"max_attempts": 3, "mode": "standard"},
            max_pool_connections=50,
        )

        self._session: Any | None = None

    def _get_session(self) -> Any:
        """Get or create the aioboto3 session."""
        if self._session is None:
            self._session = aioboto3.Session(
                aws_access_key_id=self.aws_access_key_id,
                aws_secret_access_key=self.aws_secret_access_key,
                region_name=self.region,
            )
        return self._session

    def _resource(self) -> Any:
        return self._get_session().resource(
            "dynamodb", endpoint_url=self.endpoint_url, config=self.config
        )

    def client(self) -> Any:
        return self._get_session().client(
            "dynamodb", endpoint_url=self.endpoint_url, config=self.config
        )

    async def query(self, operation: QueryOperation) -> Page:
        params: dict[str, Any] = {
            "IndexName": operation.index,
            "KeyConditionExpression": Key(operation.partition_key).eq(operation.partition_value),
            "ScanIndexForward": operation.scan_forward,
        }
        if operation.limit is not None:
            params["Limit"] = operation.limit
        if operation.next_token:
            params["ExclusiveStartKey"] = decode_cursor(operation.next_token)

        response = await self._call(operation.table, "query", params)
        return self._to_page(response)

    async def scan(self, operation: ScanOperation) -> Page:
        params: dict[str, Any] = {}
        if operation.limit is not None:
            params["Limit"] = operation.limit
        if operation.next_token:
            params["ExclusiveStartKey"] = decode_cursor(operation.next_token)

        response = await self._call(operation.table, "scan", params)
        return self._to_page(response)

    async def put_item(self, operation: PutItemOperation) -> Item:
        item = operation.item
        params: dict[str, Any] = {"Item": to_dynamo(item)}
        if operation.condition is not None:
            params["ConditionExpression"] = Attr(operation.condition.attribute).not_exists()

        await self._call(operation.table, "put_item", params)
        return item

    async def _call(self, table: Table, method: str, params: dict[str, Any]) -> dict[str, Any]:
        table_name = self.table_names[table]
        logger.debug("DynamoDB request", table=table_name, method=method)
        try:
            async with self._resource() as dynamodb:
                dynamo_table = await dynamodb.Table(table_name)
                return await getattr(dynamo_table, method)(**params)
        except ClientError as e:
            error = e.response.get("Error", {})
            code = error.get("Code", "UnknownError")
            message = error.get("Message", str(e))
            logger.warning(
                "DynamoDB request failed",
                table=table_name,
                method=method,
                error_code=code,
                error=message,
            )
            raise StoreError(message, f"DynamoDB:{code}") from e
        except BotoCoreError as e:
            logger.error("DynamoDB transport failure", table=table_name, error=str(e))
            raise StoreError(str(e), f"DynamoDB:{type(e).__name__}") from e

    def _to_page(self, response: dict[str, Any]) -> Page:
        items = [from_dynamo(item) for item in response.get("Items", [])]
        last_key = response.get("LastEvaluatedKey")
        next_token = encode_cursor(from_dynamo(last_key)) if last_key else None
        return Page(items=items, next_token=next_token)

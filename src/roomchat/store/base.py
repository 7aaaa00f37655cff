"""Core key-value store interfaces and operation descriptors."""

from __future__ import annotations

import base64
import binascii
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..logging import get_logger

logger = get_logger(__name__)

Item = dict[str, Any]


class Table(str, Enum):
    """Logical collections served by the store."""

    ROOMS = "rooms"
    MESSAGES = "messages"


@dataclass(frozen=True)
class AttributeNotExists:
    """Write precondition: no record carries this attribute yet."""

    attribute: str


@dataclass(frozen=True)
class QueryOperation:
    """Range query against a secondary index, matching one partition value."""

    table: Table
    index: str
    partition_key: str
    partition_value: str
    sort_key: str | None = None
    scan_forward: bool = True
    next_token: str | None = None
    limit: int | None = None


@dataclass(frozen=True)
class ScanOperation:
    """Unfiltered scan of a whole collection."""

    table: Table
    limit: int | None = None
    next_token: str | None = None


@dataclass(frozen=True)
class PutItemOperation:
    """Insert of a single record, optionally guarded by a precondition."""

    table: Table
    key: Item
    attribute_values: Item
    condition: AttributeNotExists | None = None

    @property
    def item(self) -> Item:
        return {**self.attribute_values, **self.key}


StoreOperation = QueryOperation | ScanOperation | PutItemOperation


@dataclass
class Page:
    """One page of a query or scan."""

    items: list[Item] = field(default_factory=list)
    next_token: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"items": self.items, "nextToken": self.next_token}


class StoreError(Exception):
    """Failure reported by a store backend.

    ``error_type`` names the failure class the way the backend reports it
    (e.g. ``DynamoDB:ConditionalCheckFailedException``).
    """

    def __init__(self, message: str, error_type: str):
        super().__init__(message)
        self.message = message
        self.error_type = error_type

    def __repr__(self) -> str:
        return f"StoreError(message={self.message!r}, error_type={self.error_type!r})"


class KeyValueStore(ABC):
    """Abstract key-value store executing one operation per call."""

    async def execute(self, operation: StoreOperation) -> Page | Item:
        """Dispatch an operation descriptor to the matching backend call.

        Returns a :class:`Page` for queries and scans, and the inserted item
        for puts.

        Raises:
            StoreError: If the backend rejects or fails the operation
        """
        if isinstance(operation, QueryOperation):
            return await self.query(operation)
        if isinstance(operation, ScanOperation):
            return await self.scan(operation)
        if isinstance(operation, PutItemOperation):
            return await self.put_item(operation)
        raise TypeError(f"Unsupported store operation: {type(operation).__name__}")

    @abstractmethod
    async def query(self, operation: QueryOperation) -> Page:
        pass

    @abstractmethod
    async def scan(self, operation: ScanOperation) -> Page:
        pass

    @abstractmethod
    async def put_item(self, operation: PutItemOperation) -> Item:
        pass

    async def close(self) -> None:
        """Release backend resources."""
        return None


def encode_cursor(last_key: Item) -> str:
    """Encode a last-evaluated key into an opaque pagination cursor."""
    raw = json.dumps(last_key, sort_keys=True, separators=(",", ":"), default=str)
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


def decode_cursor(token: str) -> Item:
    """Decode a cursor produced by :func:`encode_cursor`.

    Raises:
        StoreError: If the cursor was not issued by this store
    """
    try:
        decoded = json.loads(base64.urlsafe_b64decode(token.encode("ascii")))
    except (binascii.Error, ValueError, UnicodeError) as e:
        logger.warning("Rejected malformed pagination cursor", error=str(e))
        raise StoreError("Invalid nextToken", "ValidationException") from e

    if not isinstance(decoded, dict):
        raise StoreError("Invalid nextToken", "ValidationException")
    return decoded

"""Factory for creating the configured key-value store."""

from __future__ import annotations

from ..logging import get_logger
from .base import KeyValueStore, Table
from .memory import MemoryStore

logger = get_logger(__name__)


def create_store(backend: str | None = None) -> KeyValueStore:
    """Create a store instance from settings.

    Args:
        backend: Backend name ('memory' or 'dynamodb'); defaults to settings.store_backend

    Raises:
        ValueError: If the backend name is unknown
    """
    from ..config import settings

    backend = (backend or settings.store_backend).lower()

    if backend == "memory":
        logger.info("Using in-memory key-value store")
        return MemoryStore()
    elif backend == "dynamodb":
        from .dynamodb import DynamoDBStore

        logger.info(
            "Using DynamoDB key-value store",
            region=settings.aws_region,
            endpoint_url=settings.aws_endpoint_url,
            rooms_table=settings.rooms_table,
            messages_table=settings.messages_table,
        )
        return DynamoDBStore(
            table_names=table_names_from_settings(),
            region=settings.aws_region,
            endpoint_url=settings.aws_endpoint_url,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
        )
    else:
        raise ValueError(f"Unknown store backend: {backend}")


def table_names_from_settings() -> dict[Table, str]:
    from ..config import settings

    return {Table.ROOMS: settings.rooms_table, Table.MESSAGES: settings.messages_table}

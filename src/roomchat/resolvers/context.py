"""Per-request context handed to every resolver."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from ..auth.context import Identity

DEFAULT_MESSAGES_INDEX = "messages-by-room-id"
DEFAULT_LIST_LIMIT = 1000


def utc_now() -> datetime:
    return datetime.now(UTC)


def generate_id() -> str:
    return str(uuid4())


def iso8601(moment: datetime) -> str:
    """Format a datetime as UTC ISO-8601 with millisecond precision, e.g. 2024-05-01T12:00:00.000Z."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class ResolverContext:
    """
    Everything a resolver may depend on besides its arguments.

    The caller identity, clock and id generator are explicit so request
    mappings stay pure and can be exercised with fixed values.
    """

    identity: Identity | None = None
    now: Callable[[], datetime] = field(default=utc_now)
    id_factory: Callable[[], str] = field(default=generate_id)
    messages_index: str = DEFAULT_MESSAGES_INDEX
    default_list_limit: int = DEFAULT_LIST_LIMIT

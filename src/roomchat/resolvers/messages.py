"""Request mappings for message operations."""

from __future__ import annotations

from typing import Any

from ..store.base import AttributeNotExists, PutItemOperation, QueryOperation, Table
from .context import ResolverContext, iso8601
from .errors import invalid_argument

SORT_ASC = "ASC"
SORT_DESC = "DESC"


def list_message_for_room_request(args: dict[str, Any], ctx: ResolverContext) -> QueryOperation:
    """Query.listMessageForRoom: range query on the room index ordered by ``createdAt``."""
    room_id = args.get("roomId")
    if not room_id:
        raise invalid_argument("roomId is required")

    sort_direction = args.get("sortDirection") or SORT_ASC
    if sort_direction not in (SORT_ASC, SORT_DESC):
        raise invalid_argument(f"Unsupported sortDirection: {sort_direction}")

    return QueryOperation(
        table=Table.MESSAGES,
        index=ctx.messages_index,
        partition_key="roomId",
        partition_value=room_id,
        sort_key="createdAt",
        scan_forward=sort_direction == SORT_ASC,
        next_token=args.get("nextToken"),
        limit=args.get("limit"),
    )


def create_message_request(args: dict[str, Any], ctx: ResolverContext) -> PutItemOperation:
    """Mutation.createMessage: fill server-side fields, then insert keyed by ``id``.

    ``id`` and ``createdAt`` are generated only when absent. ``owner`` is
    always replaced with the caller's username.
    """
    if ctx.identity is None:
        raise invalid_argument("createMessage requires a signed-in caller")

    message = dict(args.get("input") or {})
    if message.get("id") is None:
        message["id"] = ctx.id_factory()
    elif not message["id"]:
        raise invalid_argument("id must not be empty")

    if message.get("createdAt") is None:
        message["createdAt"] = iso8601(ctx.now())

    message["owner"] = ctx.identity.username

    key = {"id": message.pop("id")}
    return PutItemOperation(
        table=Table.MESSAGES,
        key=key,
        attribute_values=message,
        condition=AttributeNotExists("id"),
    )

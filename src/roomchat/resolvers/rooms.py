"""Request mappings for room operations."""

from __future__ import annotations

from typing import Any

from ..store.base import AttributeNotExists, PutItemOperation, ScanOperation, Table
from .context import ResolverContext
from .errors import invalid_argument


def list_rooms_request(args: dict[str, Any], ctx: ResolverContext) -> ScanOperation:
    """Query.listRooms: unfiltered scan capped at ``limit`` (default 1000)."""
    limit = args.get("limit")
    if limit is None:
        limit = ctx.default_list_limit

    return ScanOperation(table=Table.ROOMS, limit=limit, next_token=args.get("nextToken"))


def create_room_request(args: dict[str, Any], ctx: ResolverContext) -> PutItemOperation:
    """Mutation.createRoom: insert keyed by ``id``, generating one when absent.

    The write is guarded by ``attribute_not_exists(id)`` so a colliding id is
    rejected instead of overwriting the existing room.
    """
    room = dict(args.get("input") or {})
    if room.get("id") is None:
        room["id"] = ctx.id_factory()
    elif not room["id"]:
        raise invalid_argument("id must not be empty")

    key = {"id": room.pop("id")}
    return PutItemOperation(
        table=Table.ROOMS,
        key=key,
        attribute_values=room,
        condition=AttributeNotExists("id"),
    )

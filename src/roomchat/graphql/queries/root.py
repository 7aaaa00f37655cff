"""
Root GraphQL query definitions
"""

import strawberry

from ..context import resolve_field
from ..types.common import ModelSortDirection
from ..types.message import ModelMessageConnection
from ..types.room import ModelRoomConnection


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def list_message_for_room(
        self,
        info: strawberry.Info,
        room_id: strawberry.ID,
        sort_direction: ModelSortDirection | None = None,
        next_token: str | None = None,
        limit: int | None = None,
    ) -> ModelMessageConnection | None:
        """Messages in a room ordered by creation time (ascending unless DESC)."""
        page = await resolve_field(
            info,
            "Query",
            "listMessageForRoom",
            {
                "roomId": room_id,
                "sortDirection": sort_direction.value if sort_direction else None,
                "nextToken": next_token,
                "limit": limit,
            },
        )
        return ModelMessageConnection.from_page(page)

    @strawberry.field
    async def list_rooms(
        self,
        info: strawberry.Info,
        limit: int | None = None,
        next_token: str | None = None,
    ) -> ModelRoomConnection | None:
        """All rooms, paginated."""
        page = await resolve_field(
            info, "Query", "listRooms", {"limit": limit, "nextToken": next_token}
        )
        return ModelRoomConnection.from_page(page)

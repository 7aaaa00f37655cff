"""
Room GraphQL type definitions
"""

from typing import Any

import strawberry


@strawberry.type
class Room:
    """Chat room."""

    id: strawberry.ID
    name: str | None = None

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> "Room":
        return cls(id=strawberry.ID(str(item["id"])), name=item.get("name"))


@strawberry.type
class ModelRoomConnection:
    """One page of rooms plus the cursor for the next page."""

    items: list[Room]
    next_token: str | None = None

    @classmethod
    def from_page(cls, page: dict[str, Any]) -> "ModelRoomConnection":
        return cls(
            items=[Room.from_item(item) for item in page.get("items", [])],
            next_token=page.get("nextToken"),
        )


@strawberry.input
class CreateRoomInput:
    """Input for creating a room. ``id`` is generated when omitted."""

    id: strawberry.ID | None = strawberry.UNSET
    name: str | None = strawberry.UNSET

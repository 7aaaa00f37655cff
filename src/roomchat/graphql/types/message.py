"""
Message GraphQL type definitions
"""

from typing import Any

import strawberry


@strawberry.type
class Message:
    """Chat message posted to a room."""

    id: strawberry.ID
    room_id: strawberry.ID
    text: str | None = None
    owner: str | None = None
    created_at: str | None = None

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> "Message":
        return cls(
            id=strawberry.ID(str(item["id"])),
            room_id=strawberry.ID(str(item["roomId"])),
            text=item.get("text"),
            owner=item.get("owner"),
            created_at=item.get("createdAt"),
        )


@strawberry.type
class ModelMessageConnection:
    """One page of messages plus the cursor for the next page."""

    items: list[Message]
    next_token: str | None = None

    @classmethod
    def from_page(cls, page: dict[str, Any]) -> "ModelMessageConnection":
        return cls(
            items=[Message.from_item(item) for item in page.get("items", [])],
            next_token=page.get("nextToken"),
        )


@strawberry.input
class CreateMessageInput:
    """Input for posting a message.

    ``id`` and ``createdAt`` are generated when omitted. ``owner`` is accepted
    but always replaced with the caller's username.
    """

    room_id: strawberry.ID
    id: strawberry.ID | None = strawberry.UNSET
    text: str | None = strawberry.UNSET
    created_at: str | None = strawberry.UNSET
    owner: str | None = strawberry.UNSET

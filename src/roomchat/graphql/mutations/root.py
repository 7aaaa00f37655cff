"""
Root GraphQL mutation definitions
"""

import strawberry

from ..context import resolve_field
from ..types.common import input_to_item
from ..types.message import CreateMessageInput, Message
from ..types.room import CreateRoomInput, Room


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="createMessage")
    async def create_message(
        self, info: strawberry.Info, input: CreateMessageInput
    ) -> Message | None:
        """Post a message as the signed-in caller."""
        item = await resolve_field(
            info, "Mutation", "createMessage", {"input": input_to_item(input)}
        )
        return Message.from_item(item)

    @strawberry.mutation(name="createRoom")
    async def create_room(self, info: strawberry.Info, input: CreateRoomInput) -> Room | None:
        """Create a room."""
        item = await resolve_field(info, "Mutation", "createRoom", {"input": input_to_item(input)})
        return Room.from_item(item)

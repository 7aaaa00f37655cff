"""Binding of (operation type, field name) pairs to resolvers, and their execution."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..logging import get_logger
from ..store.base import KeyValueStore, StoreError, StoreOperation
from .context import ResolverContext
from .errors import unauthorized
from .messages import create_message_request, list_message_for_room_request
from .response import StoreOutcome, passthrough_response
from .rooms import create_room_request, list_rooms_request

logger = get_logger(__name__)

RequestMapping = Callable[[dict[str, Any], ResolverContext], StoreOperation]
ResponseMapping = Callable[[StoreOutcome], Any]


@dataclass(frozen=True)
class Resolver:
    """One field handler: request mapping, a single store call, response mapping."""

    type_name: str
    field_name: str
    request: RequestMapping
    response: ResponseMapping = passthrough_response
    requires_identity: bool = True


class ResolverRegistry:
    """Registry of resolvers keyed by (type name, field name)."""

    def __init__(self) -> None:
        self._resolvers: dict[tuple[str, str], Resolver] = {}

    def register(self, resolver: Resolver) -> None:
        key = (resolver.type_name, resolver.field_name)
        if key in self._resolvers:
            raise ValueError(f"Resolver already registered for {key[0]}.{key[1]}")
        self._resolvers[key] = resolver

    def get(self, type_name: str, field_name: str) -> Resolver:
        try:
            return self._resolvers[(type_name, field_name)]
        except KeyError:
            raise KeyError(f"No resolver registered for {type_name}.{field_name}") from None

    def list_fields(self) -> list[str]:
        return [f"{type_name}.{field_name}" for type_name, field_name in self._resolvers]

    async def execute(
        self,
        type_name: str,
        field_name: str,
        args: dict[str, Any],
        ctx: ResolverContext,
        store: KeyValueStore,
    ) -> Any:
        """Resolve one field against the store.

        Store failures are not retried; they reach the response mapping,
        which decides what the caller sees.

        Raises:
            ResolverError: For unauthorized callers, invalid arguments and store errors
        """
        resolver = self.get(type_name, field_name)

        if resolver.requires_identity and ctx.identity is None:
            logger.info("Rejected unauthenticated call", field=f"{type_name}.{field_name}")
            raise unauthorized(type_name, field_name)

        operation = resolver.request(args, ctx)
        logger.debug(
            "Resolver mapped request",
            field=f"{type_name}.{field_name}",
            operation=type(operation).__name__,
            table=operation.table.value,
        )

        try:
            outcome = StoreOutcome(result=await store.execute(operation))
        except StoreError as e:
            logger.info(
                "Store rejected operation",
                field=f"{type_name}.{field_name}",
                error_type=e.error_type,
                error=e.message,
            )
            outcome = StoreOutcome(error=e)

        return resolver.response(outcome)


def create_default_registry() -> ResolverRegistry:
    """Registry holding the four chat resolvers."""
    registry = ResolverRegistry()
    registry.register(Resolver("Query", "listMessageForRoom", list_message_for_room_request))
    registry.register(Resolver("Query", "listRooms", list_rooms_request))
    registry.register(Resolver("Mutation", "createMessage", create_message_request))
    registry.register(Resolver("Mutation", "createRoom", create_room_request))
    return registry


registry = create_default_registry()

"""
Per-request GraphQL context and the bridge into the resolver layer
"""

from typing import Any

import strawberry
from fastapi import Request

from ..auth.context import AuthContext
from ..auth.middleware import get_auth_context_optional
from ..config import settings
from ..resolvers.context import ResolverContext
from ..resolvers.registry import registry
from ..store.base import KeyValueStore


def build_context(auth: AuthContext, store: KeyValueStore, **extra: Any) -> dict[str, Any]:
    """Assemble the context dict every field resolver receives."""
    return {
        "auth": auth,
        "store": store,
        "resolver_context": ResolverContext(
            identity=auth.identity,
            messages_index=settings.messages_by_room_index,
            default_list_limit=settings.list_rooms_default_limit,
        ),
        **extra,
    }


async def get_context(request: Request) -> dict[str, Any]:
    """Get the context for GraphQL resolvers."""
    auth = await get_auth_context_optional(request.headers.get("authorization"))
    return build_context(auth, request.app.state.store, request=request)


async def resolve_field(
    info: strawberry.Info, type_name: str, field_name: str, args: dict[str, Any]
) -> Any:
    """Run the registered resolver for ``type_name.field_name``."""
    context = info.context
    return await registry.execute(
        type_name,
        field_name,
        args,
        context["resolver_context"],
        context["store"],
    )

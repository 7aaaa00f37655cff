"""Resolver layer: maps GraphQL operations onto key-value store operations."""

from .context import ResolverContext
from .errors import ResolverError
from .registry import Resolver, ResolverRegistry, create_default_registry, registry
from .response import StoreOutcome, passthrough_response

__all__ = [
    "Resolver",
    "ResolverContext",
    "ResolverError",
    "ResolverRegistry",
    "StoreOutcome",
    "create_default_registry",
    "passthrough_response",
    "registry",
]

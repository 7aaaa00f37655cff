"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import Generator
from datetime import UTC, datetime
from itertools import count

import pytest

from roomchat.auth.context import Identity
from roomchat.auth.factory import reset_auth_adapter_cache
from roomchat.resolvers.context import ResolverContext
from roomchat.store.memory import MemoryStore

FIXED_NOW = datetime(2024, 5, 1, 12, 30, 45, 123000, tzinfo=UTC)


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables and cached auth adapters for each test."""
    original_env = os.environ.copy()
    reset_auth_adapter_cache()
    yield
    os.environ.clear()
    os.environ.update(original_env)
    reset_auth_adapter_cache()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def alice() -> Identity:
    return Identity(username="alice", subject="sub-alice")


@pytest.fixture
def sequential_ids():
    """Deterministic id factory: id-1, id-2, ..."""
    counter = count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def ctx(alice, sequential_ids) -> ResolverContext:
    """Resolver context for alice with a frozen clock."""
    return ResolverContext(identity=alice, now=lambda: FIXED_NOW, id_factory=sequential_ids)


@pytest.fixture
def anonymous_ctx() -> ResolverContext:
    return ResolverContext(identity=None)

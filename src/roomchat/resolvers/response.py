"""Response mapping shared by all resolvers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..store.base import Item, Page, StoreError
from .errors import ResolverError


@dataclass(frozen=True)
class StoreOutcome:
    """Raw result of one store call: either a result or the store's error."""

    result: Page | Item | None = None
    error: StoreError | None = None


def passthrough_response(outcome: StoreOutcome) -> Any:
    """
    Return the store result unchanged, or surface the store error unchanged.

    Pages become ``{"items": [...], "nextToken": ...}``; inserted items are
    returned as-is.

    Raises:
        ResolverError: Carrying the store error's message and type
    """
    if outcome.error is not None:
        raise ResolverError(outcome.error.message, outcome.error.error_type)

    if isinstance(outcome.result, Page):
        return outcome.result.to_dict()
    return outcome.result

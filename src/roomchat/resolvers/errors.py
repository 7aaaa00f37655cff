"""Errors raised by the resolver layer."""

from __future__ import annotations

from graphql import GraphQLError


class ResolverError(GraphQLError):
    """
    Error returned to the caller for a single field.

    The message and type are exposed unchanged; ``errorType`` travels in the
    GraphQL error extensions.
    """

    def __init__(self, message: str, error_type: str):
        super().__init__(message, extensions={"errorType": error_type})
        self.error_type = error_type


def unauthorized(type_name: str, field_name: str) -> ResolverError:
    return ResolverError(
        f"Not Authorized to access {field_name} on type {type_name}", "Unauthorized"
    )


def invalid_argument(message: str) -> ResolverError:
    return ResolverError(message, "ValidationException")

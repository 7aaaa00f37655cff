"""
Roomchat GraphQL schema and its FastAPI router
"""

from typing import Any

import strawberry
from graphql import get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from strawberry.fastapi import GraphQLRouter

from ..config import settings
from ..logging import get_logger
from ..resolvers.registry import registry
from .context import get_context
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)

schema = strawberry.Schema(query=Query, mutation=Mutation)


class SchemaValidationError(Exception):
    """Raised at startup when the schema cannot be served."""


def _root_fields() -> set[str]:
    graphql_schema = schema._schema
    fields: set[str] = set()
    for root in (graphql_schema.query_type, graphql_schema.mutation_type):
        if root is not None:
            fields.update(f"{root.name}.{name}" for name in root.fields)
    return fields


def validate_schema() -> None:
    """Check the schema before the server accepts traffic.

    The schema must pass graphql-core validation, answer an introspection
    query, and expose a root field for every registered resolver.

    Raises:
        SchemaValidationError: If any of the checks fails
    """
    graphql_schema = schema._schema

    problems = [str(e) for e in gql_validate_schema(graphql_schema)]
    if not problems:
        result = graphql_sync(graphql_schema, get_introspection_query())
        problems = [str(e) for e in result.errors or []]
    if not problems:
        missing = sorted(set(registry.list_fields()) - _root_fields())
        problems = [f"No schema field for resolver {field}" for field in missing]

    if problems:
        logger.error("GraphQL schema validation failed", problems=problems)
        raise SchemaValidationError("; ".join(problems))

    logger.info("GraphQL schema validation successful", fields=sorted(_root_fields()))


def create_graphql_router() -> GraphQLRouter[dict[str, Any], None]:
    """Router serving the schema at /graphql, with GraphiQL when enabled."""
    return GraphQLRouter(
        schema,
        path="/graphql",
        graphql_ide="graphiql" if settings.graphiql else None,
        context_getter=get_context,
    )

"""
Main FastAPI application for the Roomchat backend
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..auth.factory import get_auth_adapter_cached, reset_auth_adapter_cache
from ..config import settings
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..resolvers.registry import registry
from ..store.base import KeyValueStore
from ..store.factory import create_store

configure_logging(debug=settings.debug, level=settings.log_level)
logger = get_logger(__name__)


def create_app(store: KeyValueStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Store to serve from; created from settings at startup when omitted
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Roomchat API...")

        app.state.store = store if store is not None else create_store()

        # Fail fast on an unusable auth configuration
        adapter = get_auth_adapter_cached()
        logger.info("Auth adapter configured", adapter=type(adapter).__name__)
        logger.info("Resolvers registered", fields=registry.list_fields())

        yield

        logger.info("Shutting down Roomchat API...")
        await app.state.store.close()
        # Adapters holding an HTTP client (Cognito JWKS) expose aclose
        close_adapter = getattr(adapter, "aclose", None)
        if close_adapter is not None:
            await close_adapter()
            reset_auth_adapter_cache()

    app = FastAPI(
        title="Roomchat API",
        description="GraphQL chat rooms backed by a key-value store",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    from ..graphql.schema import create_graphql_router, validate_schema

    logger.info("Validating GraphQL schema...")
    validate_schema()
    app.include_router(create_graphql_router(), prefix="")
    logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "roomchat.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )

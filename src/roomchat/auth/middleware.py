"""Authentication dependencies for FastAPI."""

from __future__ import annotations

from fastapi import Header, HTTPException

from ..logging import bind_user, get_logger
from .adapters.base import AuthenticationError
from .adapters.none import NoAuthAdapter
from .context import ANONYMOUS, AuthContext
from .factory import get_auth_adapter_cached

logger = get_logger(__name__)


async def get_auth_context(authorization: str | None = Header(None)) -> AuthContext:
    """
    Extract authentication context from the Authorization header.

    Accepts ``Bearer <token>`` as well as a bare token, which is how
    user-pool clients send Cognito JWTs. In no-auth mode a missing header is
    treated as the default development token.

    Raises:
        HTTPException: 401 if a token is present but cannot be verified
    """
    adapter = get_auth_adapter_cached()

    if not authorization:
        if isinstance(adapter, NoAuthAdapter):
            authorization = "Bearer dev-token"
        else:
            return ANONYMOUS

    token = authorization[7:] if authorization.startswith("Bearer ") else authorization
    token = token.strip()

    if not token:
        logger.warning("Empty token provided")
        raise HTTPException(
            status_code=401,
            detail="Empty token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        principal = await adapter.verify_token(token)
    except AuthenticationError as e:
        logger.warning("Authentication failed", error=str(e))
        raise HTTPException(
            status_code=401,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    bind_user(principal["username"])
    logger.debug(
        "Authenticated request",
        provider=principal["provider"],
        username=principal["username"],
    )
    return AuthContext(principal=principal, token=token)


async def get_auth_context_optional(authorization: str | None = Header(None)) -> AuthContext:
    """
    Optional authentication - returns an anonymous context if the token is
    missing or invalid.
    """
    try:
        return await get_auth_context(authorization)
    except HTTPException:
        return ANONYMOUS

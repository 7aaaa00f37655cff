"""Development adapter: every token is accepted without verification."""

from __future__ import annotations

from ...config import Settings
from ...logging import get_logger
from .base import AuthenticationError, Principal

logger = get_logger(__name__)

DEV_TOKEN_PREFIX = "dev-token"
PRODUCTION_NAMES = ("production", "prod")


class NoAuthAdapter:
    """
    Treats every caller as signed in, for running the API locally.

    ``dev-token|<username>`` signs in as ``<username>``, which lets one
    machine chat as several people; any other non-empty token is the default
    user. The adapter refuses to start when the environment says production.
    """

    def __init__(self, default_username: str = "dev-user", environment: str | None = None):
        if environment is None:
            environment = Settings().environment
        environment = environment.lower()
        if environment in PRODUCTION_NAMES:
            logger.error("Refusing no-auth mode in production", environment=environment)
            raise RuntimeError(
                "NoAuthAdapter cannot be used in production environments. "
                "Set ROOMCHAT_AUTH_PROVIDER to 'cognito' or 'jwt'."
            )

        self.default_username = default_username
        logger.warning(
            "No-auth mode: all requests are accepted as signed in",
            default_username=default_username,
        )

    def username_for(self, token: str) -> str:
        prefix, _, rest = token.partition("|")
        username = rest.split("|", 1)[0]
        if prefix == DEV_TOKEN_PREFIX and username:
            return username
        return self.default_username

    async def verify_token(self, token: str) -> Principal:
        if not token:
            raise AuthenticationError("Token required (even in no-auth mode)")

        username = self.username_for(token)
        return Principal(
            provider="none",
            subject=username,
            username=username,
            email=f"{username}@example.com",
            claims={"mode": "development"},
        )

    async def issue_token(self, username: str | None = None, claims: dict | None = None) -> str:
        """Build a ``dev-token|<username>[|key=value...]`` token."""
        parts = [DEV_TOKEN_PREFIX, username or self.default_username]
        parts.extend(f"{key}={value}" for key, value in (claims or {}).items())
        return "|".join(parts)

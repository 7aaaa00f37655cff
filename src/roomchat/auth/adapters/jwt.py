"""Self-issued HS256 tokens, for deployments without a user pool."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt.exceptions import InvalidTokenError

from ...logging import get_logger
from .base import AuthenticationError, Principal, username_from_claims

logger = get_logger(__name__)

USERNAME_CLAIMS = ("username", "cognito:username", "preferred_username")


class JWTAuthAdapter:
    """
    Issues and verifies tokens signed with a shared secret.

    Tokens must carry ``sub``, ``exp`` and ``iat`` and match the configured
    issuer and audience. The username is read from the first of
    ``username``, ``cognito:username`` or ``preferred_username`` and falls back
    to ``sub``, so tokens minted for a Cognito pool's users map to the same
    owners.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "roomchat",
        audience: str = "roomchat-api",
        token_expiry_hours: int = 24,
        leeway_seconds: int = 0,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.token_lifetime = timedelta(hours=token_expiry_hours)
        self.leeway = timedelta(seconds=leeway_seconds)

    def _decode(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                leeway=self.leeway,
                options={"require": ["sub", "exp", "iat"]},
            )
        except InvalidTokenError as e:
            logger.warning("JWT token validation failed", error=str(e))
            raise AuthenticationError(f"Invalid token: {e}") from e

    async def verify_token(self, token: str) -> Principal:
        claims = self._decode(token)
        subject = claims["sub"]

        principal = Principal(
            provider="jwt",
            subject=subject,
            username=username_from_claims(claims, *USERNAME_CLAIMS) or subject,
            claims=claims,
        )
        if claims.get("email"):
            principal["email"] = claims["email"]
        return principal

    async def issue_token(self, username: str | None = None, claims: dict | None = None) -> str:
        """Sign a token for ``username`` valid for the configured lifetime."""
        issued_at = datetime.now(UTC)
        payload: dict[str, Any] = {
            "iss": self.issuer,
            "aud": self.audience,
            "iat": issued_at,
            "nbf": issued_at,
            "exp": issued_at + self.token_lifetime,
            **(claims or {}),
        }
        if username:
            payload.setdefault("sub", username)
            payload["username"] = username

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

"""Identity provider contract shared by all auth adapters."""

from __future__ import annotations

from typing import Literal, NotRequired, Protocol, TypedDict


class Principal(TypedDict):
    """Caller identity extracted from a verified token."""

    provider: Literal["cognito", "jwt", "none"]
    subject: str  # provider user id (sub)
    username: str  # becomes identity.username, the owner of created messages
    email: NotRequired[str]
    claims: NotRequired[dict]


class AuthAdapter(Protocol):
    """What the API needs from an identity provider."""

    async def verify_token(self, token: str) -> Principal:
        """Return the principal for ``token``; raise AuthenticationError if it is not valid."""
        ...

    async def issue_token(self, username: str | None = None, claims: dict | None = None) -> str:
        """Mint a token for ``username``. Providers that do not issue tokens raise NotImplementedError."""
        ...


class AuthenticationError(Exception):
    """A token is missing, malformed, expired or not meant for this API."""


def username_from_claims(claims: dict, *keys: str) -> str | None:
    """Return the first non-empty string claim among ``keys``."""
    for key in keys:
        value = claims.get(key)
        if isinstance(value, str) and value:
            return value
    return None

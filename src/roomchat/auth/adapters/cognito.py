"""Amazon Cognito user pool authentication adapter."""

from __future__ import annotations

import time
from typing import Any

import httpx
import jwt
from jwt.exceptions import InvalidTokenError, PyJWKError

from ...logging import get_logger
from .base import AuthenticationError, Principal, username_from_claims

logger = get_logger(__name__)


class CognitoAuthAdapter:
    """
    Verifies ID and access tokens issued by a Cognito user pool.

    Signing keys are read from the pool's JWKS document and cached. ID tokens
    are matched to the app client by ``aud``; access tokens carry no audience
    and are matched by ``client_id`` instead.
    """

    def __init__(
        self,
        region: str,
        user_pool_id: str,
        client_id: str,
        jwks_cache_ttl: int = 3600,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.region = region
        self.user_pool_id = user_pool_id
        self.client_id = client_id
        self.issuer = f"https://cognito-idp.{region}.amazonaws.com/{user_pool_id}"
        self.jwks_url = f"{self.issuer}/.well-known/jwks.json"
        self.jwks_cache_ttl = jwks_cache_ttl
        # Cache structure: {"data": jwks_data, "expires_at": timestamp}
        self._jwks_cache: dict[str, Any] = {}
        self._http_client = http_client or httpx.AsyncClient()

    async def verify_token(self, token: str) -> Principal:
        """Verify a Cognito JWT and return the principal."""
        try:
            unverified_header = jwt.get_unverified_header(token)
            kid = unverified_header.get("kid")
            if not kid:
                raise AuthenticationError("Missing 'kid' in JWT header")

            jwks = await self._get_jwks()
            jwk = next((key for key in jwks.get("keys", []) if key.get("kid") == kid), None)
            if jwk is None:
                raise AuthenticationError(f"Unable to find key with kid: {kid}")

            signing_key = jwt.PyJWK(jwk)
            payload = jwt.decode(
                token,
                signing_key.key,
                algorithms=[jwk.get("alg", "RS256")],
                issuer=self.issuer,
                options={
                    "verify_exp": True,
                    "verify_iat": True,
                    "verify_iss": True,
                    "verify_aud": False,
                },
            )

            self._check_client(payload)

            subject = payload.get("sub")
            if not subject:
                raise AuthenticationError("Missing 'sub' claim in token")

            username = username_from_claims(payload, "cognito:username", "username") or subject

            principal = Principal(provider="cognito", subject=subject, username=username)
            if email := payload.get("email"):
                principal["email"] = email
            principal["claims"] = payload

            return principal

        except AuthenticationError:
            raise
        except (InvalidTokenError, PyJWKError) as e:
            logger.warning("Cognito token validation failed", error=str(e))
            raise AuthenticationError(f"Invalid token: {e}") from e

    def _check_client(self, payload: dict[str, Any]) -> None:
        token_use = payload.get("token_use")
        if token_use == "id":
            audience = payload.get("aud")
            if audience != self.client_id:
                raise AuthenticationError("Token was not issued for this client")
        elif token_use == "access":
            if payload.get("client_id") != self.client_id:
                raise AuthenticationError("Token was not issued for this client")
        else:
            raise AuthenticationError(f"Unsupported token_use: {token_use}")

    async def issue_token(self, username: str | None = None, claims: dict | None = None) -> str:
        """Token issuance belongs to the Cognito hosted UI or the AWS SDK."""
        raise NotImplementedError("Cognito tokens are issued by the user pool, not the API")

    async def _get_jwks(self) -> dict[str, Any]:
        """Get the user pool JWKS with TTL caching."""
        current_time = time.time()

        if self._jwks_cache and current_time < self._jwks_cache["expires_at"]:
            return self._jwks_cache["data"]

        try:
            logger.debug("Fetching JWKS from user pool", jwks_url=self.jwks_url)
            response = await self._http_client.get(self.jwks_url)
            response.raise_for_status()
            jwks = response.json()
        except httpx.HTTPError as e:
            logger.error("Failed to fetch JWKS from user pool", error=str(e))
            raise AuthenticationError("Unable to verify token - JWKS unavailable") from e

        self._jwks_cache = {"data": jwks, "expires_at": current_time + self.jwks_cache_ttl}
        logger.info(
            "Updated JWKS cache",
            cache_ttl=self.jwks_cache_ttl,
            keys_count=len(jwks.get("keys", [])),
        )
        return jwks

    async def aclose(self) -> None:
        await self._http_client.aclose()

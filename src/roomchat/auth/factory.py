"""Factory for creating auth adapters based on configuration."""

from __future__ import annotations

import json

from ..config import Settings
from .adapters.base import AuthAdapter
from .adapters.cognito import CognitoAuthAdapter
from .adapters.jwt import JWTAuthAdapter
from .adapters.none import NoAuthAdapter


def get_auth_adapter(config: Settings | None = None) -> AuthAdapter:
    """Create the adapter selected by ``auth_provider``.

    Settings are re-read from the environment and ``.env`` when not given, so
    the adapter always reflects the current configuration. Values in
    ``auth_config`` take precedence over the dedicated settings fields.
    """
    config = config or Settings()
    provider = config.auth_provider
    options = config.auth_config

    if provider == "none":
        return NoAuthAdapter(
            default_username=options.get("default_username", "dev-user"),
            environment=config.environment,
        )

    elif provider == "jwt":
        secret_key = options.get("secret_key") or config.jwt_secret
        if not secret_key:
            raise ValueError(
                "JWT secret key is required. Set ROOMCHAT_JWT_SECRET or provide in config."
            )

        return JWTAuthAdapter(
            secret_key=secret_key,
            algorithm=options.get("algorithm", "HS256"),
            issuer=options.get("issuer", "roomchat"),
            audience=options.get("audience", "roomchat-api"),
        )

    elif provider == "cognito":
        user_pool_id = options.get("user_pool_id") or config.cognito_user_pool_id
        client_id = options.get("client_id") or config.cognito_client_id

        if not user_pool_id or not client_id:
            raise ValueError(
                "Cognito user pool id and client id are required. "
                "Set ROOMCHAT_COGNITO_USER_POOL_ID and ROOMCHAT_COGNITO_CLIENT_ID "
                "or provide in config."
            )

        return CognitoAuthAdapter(
            region=options.get("region") or config.aws_region,
            user_pool_id=user_pool_id,
            client_id=client_id,
            jwks_cache_ttl=int(options.get("jwks_cache_ttl", 3600)),
        )

    else:
        raise ValueError(f"Unsupported auth provider: {provider}")


def _cache_key(config: Settings) -> tuple[str | None, ...]:
    return (
        config.auth_provider,
        json.dumps(config.auth_config, sort_keys=True, default=str),
        config.jwt_secret,
        config.aws_region,
        config.cognito_user_pool_id,
        config.cognito_client_id,
        config.environment,
    )


_adapter_cache: dict[tuple[str | None, ...], AuthAdapter] = {}


def get_auth_adapter_cached(config: Settings | None = None) -> AuthAdapter:
    """Get the adapter for the current configuration, reusing earlier instances.

    The cache is keyed on the auth-related settings so a changed configuration
    yields a fresh adapter. Reuse keeps the Cognito JWKS cache warm.
    """
    config = config or Settings()
    key = _cache_key(config)
    adapter = _adapter_cache.get(key)
    if adapter is None:
        adapter = get_auth_adapter(config)
        _adapter_cache[key] = adapter
    return adapter


def reset_auth_adapter_cache() -> None:
    _adapter_cache.clear()

"""Unit tests for auth adapter factory."""

import json
import os
from unittest.mock import patch

import pytest

from roomchat.auth.adapters.cognito import CognitoAuthAdapter
from roomchat.auth.adapters.jwt import JWTAuthAdapter
from roomchat.auth.adapters.none import NoAuthAdapter
from roomchat.auth.factory import get_auth_adapter, get_auth_adapter_cached
from roomchat.config import Settings


class TestAuthFactory:
    """Test auth adapter factory."""

    @patch.dict(os.environ, {}, clear=True)
    def test_default_none_adapter(self):
        assert isinstance(get_auth_adapter(), NoAuthAdapter)

    @patch.dict(os.environ, {"ROOMCHAT_AUTH_PROVIDER": "jwt", "ROOMCHAT_JWT_SECRET": "s3cret"})
    def test_jwt_adapter_with_env_vars(self):
        adapter = get_auth_adapter()
        assert isinstance(adapter, JWTAuthAdapter)
        assert adapter.secret_key == "s3cret"

    @patch.dict(os.environ, {"ROOMCHAT_AUTH_PROVIDER": "jwt"}, clear=True)
    def test_jwt_adapter_missing_secret(self):
        with pytest.raises(ValueError, match="JWT secret key is required"):
            get_auth_adapter()

    @patch.dict(
        os.environ,
        {
            "ROOMCHAT_AUTH_PROVIDER": "cognito",
            "ROOMCHAT_AUTH_CONFIG": json.dumps(
                {"region": "eu-west-1", "user_pool_id": "eu-west-1_abc", "client_id": "cid"}
            ),
        },
    )
    def test_cognito_adapter_from_config(self):
        adapter = get_auth_adapter()
        assert isinstance(adapter, CognitoAuthAdapter)
        assert adapter.issuer == "https://cognito-idp.eu-west-1.amazonaws.com/eu-west-1_abc"
        assert adapter.client_id == "cid"

    @patch.dict(os.environ, {"ROOMCHAT_AUTH_PROVIDER": "cognito"}, clear=True)
    def test_cognito_adapter_missing_pool(self):
        with pytest.raises(ValueError, match="user pool id and client id are required"):
            get_auth_adapter()

    @patch.dict(os.environ, {"ROOMCHAT_AUTH_PROVIDER": "unsupported"})
    def test_unsupported_provider(self):
        with pytest.raises(ValueError, match="Unsupported auth provider: unsupported"):
            get_auth_adapter()

    @patch.dict(os.environ, {"ROOMCHAT_AUTH_PROVIDER": "jwt", "ROOMCHAT_JWT_SECRET": "a"})
    def test_cached_adapter_tracks_environment(self):
        first = get_auth_adapter_cached()
        assert get_auth_adapter_cached() is first

        os.environ["ROOMCHAT_JWT_SECRET"] = "b"
        second = get_auth_adapter_cached()
        assert second is not first
        assert second.secret_key == "b"


AUTH_ENV_VARS = (
    "ROOMCHAT_AUTH_PROVIDER",
    "ROOMCHAT_AUTH_CONFIG",
    "ROOMCHAT_JWT_SECRET",
    "ROOMCHAT_ENVIRONMENT",
)


@pytest.fixture
def env_file_dir(tmp_path, monkeypatch):
    """Working directory whose .env is the only source of auth settings."""
    for name in AUTH_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestAuthFactoryDotEnv:
    """Auth settings read from a .env file instead of the process environment."""

    def test_provider_from_env_file(self, env_file_dir):
        (env_file_dir / ".env").write_text(
            "ROOMCHAT_AUTH_PROVIDER=jwt\nROOMCHAT_JWT_SECRET=from-dotenv\n"
        )

        adapter = get_auth_adapter()

        assert isinstance(adapter, JWTAuthAdapter)
        assert adapter.secret_key == "from-dotenv"

    def test_explicit_settings(self, tmp_path):
        env_file = tmp_path / "auth.env"
        env_file.write_text("ROOMCHAT_AUTH_PROVIDER=jwt\nROOMCHAT_JWT_SECRET=explicit\n")

        adapter = get_auth_adapter(Settings(_env_file=env_file))

        assert isinstance(adapter, JWTAuthAdapter)
        assert adapter.secret_key == "explicit"

    def test_production_from_env_file_refuses_no_auth(self, env_file_dir):
        (env_file_dir / ".env").write_text("ROOMCHAT_ENVIRONMENT=production\n")

        with pytest.raises(RuntimeError, match="production"):
            get_auth_adapter()

    def test_cache_follows_env_file(self, env_file_dir):
        assert isinstance(get_auth_adapter_cached(), NoAuthAdapter)

        (env_file_dir / ".env").write_text(
            "ROOMCHAT_AUTH_PROVIDER=jwt\nROOMCHAT_JWT_SECRET=later\n"
        )

        assert isinstance(get_auth_adapter_cached(), JWTAuthAdapter)

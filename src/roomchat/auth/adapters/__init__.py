"""Authentication adapters for supported identity providers."""

from .base import AuthAdapter, AuthenticationError, Principal
from .cognito import CognitoAuthAdapter
from .jwt import JWTAuthAdapter
from .none import NoAuthAdapter

__all__ = [
    "AuthAdapter",
    "AuthenticationError",
    "CognitoAuthAdapter",
    "JWTAuthAdapter",
    "NoAuthAdapter",
    "Principal",
]

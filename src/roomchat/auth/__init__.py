"""Authentication for Roomchat."""

from .adapters.base import AuthAdapter, AuthenticationError, Principal
from .context import AuthContext, Identity
from .factory import get_auth_adapter
from .middleware import get_auth_context, get_auth_context_optional

__all__ = [
    "AuthAdapter",
    "AuthContext",
    "AuthenticationError",
    "Identity",
    "Principal",
    "get_auth_adapter",
    "get_auth_context",
    "get_auth_context_optional",
]

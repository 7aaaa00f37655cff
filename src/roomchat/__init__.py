"""
Roomchat backend
GraphQL chat rooms and messages over a key-value store
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]

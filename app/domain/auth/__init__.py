"""Broadcaster authentication context (simulated provider, file-backed session)."""

from .auth_context import AuthContext
from .auth_models import AuthUser
from .auth_provider import AuthProvider, DemoAuthProvider
from .session_storage import SessionStorage

__all__ = [
    "AuthContext",
    "AuthProvider",
    "AuthUser",
    "DemoAuthProvider",
    "SessionStorage",
]

"""
Authentication module.

Resolves inbound requests to a Supabase session and the bearer token that
wallet operations re-present to the wallet provider.

Public API:
- ISessionResolver: Interface for session resolution
- ResolvedSession, Session: Resolution results
- Auth exceptions: MissingCredentialError, UnauthorizedError, AuthProviderError
"""

from .interfaces import ISessionResolver
from .models import ResolvedSession, Session, SessionClaims
from .exceptions import (
    MissingCredentialError,
    UnauthorizedError,
    AuthProviderError,
)

__all__ = [
    # Interface
    "ISessionResolver",
    # Models
    "ResolvedSession",
    "Session",
    "SessionClaims",
    # Exceptions
    "MissingCredentialError",
    "UnauthorizedError",
    "AuthProviderError",
]

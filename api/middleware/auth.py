"""
Session authentication dependencies.

Resolves the request's bearer token and Supabase session cookie into a
ResolvedSession. Failures propagate as auth module exceptions and are
rendered as 401 responses by the error handler.
"""

from fastapi import Depends, Request

from modules.auth.interfaces import ISessionResolver
from modules.auth.models import ResolvedSession
from shared.models import AuthenticatedUser

from ..dependencies import get_session_resolver


async def get_resolved_session(
    request: Request,
    resolver: ISessionResolver = Depends(get_session_resolver),
) -> ResolvedSession:
    """
    Dependency that requires an authenticated session.

    Usage:
        @router.post("/protected")
        async def protected_route(session: ResolvedSession = Depends(get_resolved_session)):
            return {"user_id": session.subject_id}
    """
    return await resolver.resolve(
        request.headers.get("Authorization"),
        request.cookies,
    )


async def get_current_user(
    session: ResolvedSession = Depends(get_resolved_session),
) -> AuthenticatedUser:
    """Dependency that returns only the authenticated user."""
    return session.user

"""
Authentication module interface.

Other modules should depend on ISessionResolver, not the concrete implementation.
This enables testing with mocks and swapping the auth provider.
"""

from typing import Mapping, Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import ResolvedSession, Session


@runtime_checkable
class ISessionResolver(Protocol):
    """
    Interface for resolving inbound requests to an authenticated session.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def resolve(
        self,
        authorization: Optional[str],
        cookies: Mapping[str, str],
    ) -> ResolvedSession:
        """
        Resolve request credentials to an authenticated session.

        Args:
            authorization: Raw Authorization header value, if any
            cookies: Request cookies

        Returns:
            ResolvedSession with the user and the original bearer token

        Raises:
            MissingCredentialError: If no bearer token was supplied
            UnauthorizedError: If there is no session or it is rejected
        """
        ...

    async def validate_session(
        self, access_token: str
    ) -> tuple[AuthenticatedUser, Session]:
        """
        Validate a session access token against the auth provider.

        Args:
            access_token: Supabase access token

        Returns:
            The authenticated user and the validated session

        Raises:
            UnauthorizedError: If the token is expired, malformed or rejected
        """
        ...

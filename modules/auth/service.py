"""
Session resolver implementation.

Resolves inbound requests to an authenticated Supabase session. Tokens are
always validated by Supabase Auth; local decoding only rejects tokens that
are malformed, expired or issued by someone else before the network call.
"""

import asyncio
import logging
from typing import Mapping, Optional

import jwt
from supabase import AuthError, AuthRetryableError, Client

from shared.config import get_settings
from shared.database import get_supabase_client
from shared.models import AuthenticatedUser

from .cookies import default_cookie_name, read_session_cookie
from .exceptions import AuthProviderError, MissingCredentialError, UnauthorizedError
from .interfaces import ISessionResolver
from .models import ResolvedSession, Session, SessionClaims

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    if authorization[: len(BEARER_PREFIX)].lower() != BEARER_PREFIX:
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


class SessionResolver(ISessionResolver):
    """
    Implementation of the session resolver.

    The bearer token is mandatory because wallet operations re-present it
    to the wallet provider. The session itself comes from the Supabase
    session cookie, or from the bearer token when no cookie is sent.
    """

    def __init__(self, client: Optional[Client] = None):
        self._settings = get_settings()
        self._client = client
        self._cookie_name = self._settings.supabase_auth_cookie or default_cookie_name(
            self._settings.supabase_url
        )

    @property
    def expected_issuer(self) -> Optional[str]:
        if not self._settings.supabase_url:
            return None
        return f"{self._settings.supabase_url.rstrip('/')}/auth/v1"

    def _get_client(self) -> Client:
        if self._client is None:
            self._client = get_supabase_client()
        return self._client

    async def resolve(
        self,
        authorization: Optional[str],
        cookies: Mapping[str, str],
    ) -> ResolvedSession:
        """Resolve request credentials to an authenticated session."""
        bearer_token = extract_bearer_token(authorization)
        if not bearer_token:
            raise MissingCredentialError()

        access_token = read_session_cookie(cookies, self._cookie_name)
        if access_token is None:
            logger.debug("No session cookie, validating bearer token as session")
            access_token = bearer_token

        user, session = await self.validate_session(access_token)
        return ResolvedSession(user=user, bearer_token=bearer_token, session=session)

    def _read_claims(self, access_token: str) -> SessionClaims:
        try:
            payload = jwt.decode(access_token, options={"verify_signature": False})
            return SessionClaims(**payload)
        except jwt.InvalidTokenError as e:
            raise UnauthorizedError(reason=f"Malformed session token: {e}")
        except (TypeError, ValueError) as e:
            raise UnauthorizedError(reason=f"Invalid session claims: {e}")

    async def validate_session(
        self, access_token: str
    ) -> tuple[AuthenticatedUser, Session]:
        """Validate a session access token against Supabase Auth."""
        claims = self._read_claims(access_token)

        if claims.is_expired():
            raise UnauthorizedError(reason="Session has expired")

        issuer = self.expected_issuer
        if issuer and claims.iss and claims.iss.rstrip("/") != issuer:
            raise UnauthorizedError(reason=f"Unexpected token issuer: {claims.iss}")

        try:
            client = self._get_client()
            response = await asyncio.to_thread(client.auth.get_user, access_token)
        except AuthRetryableError as e:
            logger.error(f"Supabase Auth unavailable: {e}")
            raise AuthProviderError(f"Auth provider unavailable: {e}")
        except AuthError as e:
            logger.info(f"Supabase rejected session for subject {claims.sub}: {e}")
            raise UnauthorizedError(reason=str(e))

        if response is None or response.user is None:
            raise UnauthorizedError(reason="Session not found")

        supabase_user = response.user
        user = AuthenticatedUser(
            id=supabase_user.id,
            email=supabase_user.email,
            email_verified=supabase_user.email_confirmed_at is not None,
            last_sign_in=supabase_user.last_sign_in_at,
        )
        session = Session(
            subject_id=supabase_user.id,
            access_token=access_token,
            expires_at=claims.expires_at,
            issuer=claims.iss,
        )
        return user, session


# Module-level instance getter
_service_instance: Optional[SessionResolver] = None


def get_session_resolver() -> SessionResolver:
    """Get the session resolver singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = SessionResolver()
    return _service_instance


def reset_session_resolver() -> None:
    """Reset the session resolver singleton (for testing)."""
    global _service_instance
    _service_instance = None

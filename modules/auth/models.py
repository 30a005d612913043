"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import AuthenticatedUser


class SessionClaims(BaseModel):
    """
    Claims read from a Supabase access token.

    The token is decoded without signature verification; the claims are
    only trusted after Supabase Auth has accepted the token.
    """

    sub: str = Field(..., description="Subject (user ID)")
    exp: Optional[int] = Field(None, description="Expiration timestamp")
    iat: Optional[int] = Field(None, description="Issued at timestamp")
    iss: Optional[str] = Field(None, description="Issuer")
    aud: Optional[str | list[str]] = Field(None, description="Audience")
    email: Optional[str] = Field(None, description="User's email")
    role: str = Field(default="authenticated", description="User role")
    session_id: Optional[str] = Field(None, description="Supabase session ID")

    @property
    def expires_at(self) -> Optional[datetime]:
        if self.exp is None:
            return None
        return datetime.fromtimestamp(self.exp, tz=timezone.utc)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        expires_at = self.expires_at
        if expires_at is None:
            return False
        return expires_at <= (now or datetime.now(timezone.utc))


class Session(BaseModel):
    """A validated auth provider session."""

    subject_id: str = Field(..., description="Stable subject identifier")
    access_token: str = Field(..., description="Session access token")
    expires_at: Optional[datetime] = Field(None, description="Token expiry")
    issuer: Optional[str] = Field(None, description="Token issuer")

    model_config = {"frozen": True}


class ResolvedSession(BaseModel):
    """
    Outcome of resolving an inbound request.

    bearer_token is the raw Authorization header credential. Wallet
    operations re-present it to the wallet provider, so it is kept
    separately from the session access token.
    """

    user: AuthenticatedUser
    bearer_token: str
    session: Session

    model_config = {"frozen": True}

    @property
    def subject_id(self) -> str:
        return self.user.id

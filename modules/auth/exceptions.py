"""
Authentication module exceptions.

These exceptions are raised by the auth module and rendered by the API
error handler as 401 responses (500 for AuthProviderError).
"""

from shared.exceptions import AuthenticationError, ExternalServiceError


class MissingCredentialError(AuthenticationError):
    """Raised when the request carries no bearer token."""

    def __init__(self, message: str = "Missing Privy access token"):
        super().__init__(message, code="MISSING_CREDENTIAL")


class UnauthorizedError(AuthenticationError):
    """Raised when there is no session, or the auth provider rejects it."""

    def __init__(self, message: str = "Unauthorized", reason: str | None = None):
        super().__init__(
            message,
            code="UNAUTHORIZED",
            details={"reason": reason} if reason else {},
        )


class AuthProviderError(ExternalServiceError):
    """Raised when the auth provider cannot be reached."""

    def __init__(self, message: str):
        super().__init__(message, service="supabase", code="AUTH_PROVIDER_ERROR")

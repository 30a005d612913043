"""
Base exception classes for the Walletlink backend.

Each module should define its own exceptions that inherit from these bases.
The API layer renders any WalletlinkError using its status_code, so the
family a module exception inherits from decides the HTTP status.
"""

from typing import Optional, Any


class WalletlinkError(Exception):
    """
    Base exception for all Walletlink errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}


class NotFoundError(WalletlinkError):
    """Resource not found."""

    status_code = 404


class ValidationError(WalletlinkError):
    """Input validation failed."""

    status_code = 400


class AuthenticationError(WalletlinkError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class ExternalServiceError(WalletlinkError):
    """Error communicating with an external service."""

    status_code = 500

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service

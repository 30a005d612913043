"""
Wallets module exceptions.

Lookup failures render as 404, provider failures as 500. Every action
failure is terminal; nothing here is retried.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError, NotFoundError, ValidationError

PRIVY_SERVICE = "privy"


class MissingInputError(ValidationError):
    """Raised when a required request field is absent."""

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(
            message or f"Missing {field} claim",
            code="MISSING_INPUT",
            details={"field": field},
        )


class NoUserRecordError(NotFoundError):
    """Raised when the wallet provider has no user for the subject."""

    def __init__(self, subject_id: str):
        super().__init__(
            "Privy user not found",
            code="NO_USER_RECORD",
            details={"subject_id": subject_id},
        )


class NoWalletFoundError(NotFoundError):
    """Raised when the provider user has no provider-managed wallet."""

    def __init__(self, subject_id: str, chain_type: str):
        super().__init__(
            "No embedded wallet found",
            code="NO_WALLET_FOUND",
            details={"subject_id": subject_id, "chain_type": chain_type},
        )


class WalletProviderError(ExternalServiceError):
    """Raised when a wallet provider request fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(
            message,
            service=PRIVY_SERVICE,
            code="WALLET_PROVIDER_ERROR",
            details={"provider_status": status_code} if status_code else {},
        )
        self.provider_status = status_code

    @property
    def is_not_found(self) -> bool:
        return self.provider_status == 404


class ProvisioningFailedError(ExternalServiceError):
    """Raised when creating the provider user and its wallet fails."""

    def __init__(self, message: str = "Failed to create Privy user"):
        super().__init__(message, service=PRIVY_SERVICE, code="PROVISIONING_FAILED")


class SigningFailedError(ExternalServiceError):
    """Raised when the provider refuses or fails to sign a message."""

    def __init__(self, message: str = "Failed to sign message"):
        super().__init__(message, service=PRIVY_SERVICE, code="SIGNING_FAILED")


class TransactionFailedError(ExternalServiceError):
    """Raised when the provider refuses or fails to send a transaction."""

    def __init__(self, message: str = "Failed to send transaction"):
        super().__init__(message, service=PRIVY_SERVICE, code="TRANSACTION_FAILED")

"""
Wallets module interface.

Routes depend on IWalletService, not the concrete implementation.
"""

from typing import Optional, Protocol, runtime_checkable

from modules.auth.models import ResolvedSession

from .models import PrivyUser, SignedMessage, TransactionReceipt, WalletAccount


@runtime_checkable
class IWalletService(Protocol):
    """
    Interface for wallet operations.

    Each operation makes at most one state-changing provider call and
    never retries.
    """

    async def find_wallet(self, subject_id: str) -> WalletAccount:
        """
        Find the provider-managed wallet linked to a subject.

        Args:
            subject_id: Supabase user ID, used as the custom auth ID

        Returns:
            The first qualifying WalletAccount

        Raises:
            NoUserRecordError: If no provider user is linked to the subject
            NoWalletFoundError: If the user has no provider-managed wallet
        """
        ...

    async def create_user(
        self, sub: Optional[str], email: Optional[str] = None
    ) -> PrivyUser:
        """
        Create a provider user linked to a subject, with one wallet.

        Raises:
            MissingInputError: If sub is absent
            ProvisioningFailedError: If the provider call fails
        """
        ...

    async def sign_message(self, session: ResolvedSession) -> SignedMessage:
        """
        Sign the fixed message with the session's wallet.

        Raises:
            NoUserRecordError, NoWalletFoundError: If lookup fails
            SigningFailedError: If the provider call fails
        """
        ...

    async def send_transaction(self, session: ResolvedSession) -> TransactionReceipt:
        """
        Send the fixed sponsored zero-value transaction from the session's wallet.

        Raises:
            NoUserRecordError, NoWalletFoundError: If lookup fails
            TransactionFailedError: If the provider call fails
        """
        ...

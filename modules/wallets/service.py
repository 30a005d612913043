"""
Wallet service implementation.

Every action follows the same linear flow: look up the subject's wallet,
make one provider call, shape the result. The signed message and the
transaction are fixed; callers cannot influence them.
"""

import logging
from typing import Optional

from modules.auth.models import ResolvedSession

from .client import PrivyClient
from .exceptions import (
    MissingInputError,
    NoUserRecordError,
    NoWalletFoundError,
    ProvisioningFailedError,
    SigningFailedError,
    TransactionFailedError,
    WalletProviderError,
)
from .interfaces import IWalletService
from .models import (
    AuthorizationContext,
    PrivyUser,
    SignedMessage,
    TransactionReceipt,
    WalletAccount,
)

logger = logging.getLogger(__name__)

SIGN_MESSAGE = "hello world"
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
ZERO_VALUE = "0x0"
BASE_SEPOLIA_CAIP2 = "eip155:84532"


class WalletService(IWalletService):
    """
    Implementation of the wallet service backed by Privy.

    The subject ID is the custom auth ID on both provisioning and lookup,
    so a user created here is always found again by the same subject.
    """

    def __init__(self, client: PrivyClient, chain_type: str = "ethereum"):
        self._client = client
        self._chain_type = chain_type

    @property
    def chain_type(self) -> str:
        return self._chain_type

    async def find_wallet(self, subject_id: str) -> WalletAccount:
        """Find the first provider-managed wallet linked to a subject."""
        user = await self._client.get_user_by_custom_auth_id(subject_id)
        if user is None:
            raise NoUserRecordError(subject_id)

        wallet = user.embedded_wallet(self._chain_type)
        if wallet is None:
            raise NoWalletFoundError(subject_id, self._chain_type)
        return wallet

    async def create_user(
        self, sub: Optional[str], email: Optional[str] = None
    ) -> PrivyUser:
        """Create a provider user linked to sub, with one wallet."""
        if not sub or not sub.strip():
            raise MissingInputError("sub")

        try:
            user = await self._client.create_user(
                linked_accounts=[{"type": "custom_auth", "custom_user_id": sub}],
                wallets=[{"chain_type": self._chain_type}],
                custom_metadata={"email": email} if email else None,
            )
        except WalletProviderError as e:
            logger.error(f"Failed to create Privy user for subject {sub}: {e.message}")
            raise ProvisioningFailedError(e.message)

        wallets = user.wallets(self._chain_type)
        if user.custom_user_id != sub or len(wallets) != 1:
            logger.warning(
                f"Privy user {user.id} for subject {sub} is linked to "
                f"{user.custom_user_id} with {len(wallets)} {self._chain_type} wallet(s)"
            )
        logger.info(f"Created Privy user {user.id} for subject {sub}")
        return user

    def _authorization_context(self, session: ResolvedSession) -> AuthorizationContext:
        return AuthorizationContext(user_jwts=[session.bearer_token])

    async def sign_message(self, session: ResolvedSession) -> SignedMessage:
        """Sign the fixed message with the session's wallet."""
        try:
            wallet = await self.find_wallet(session.subject_id)
        except WalletProviderError as e:
            logger.error(f"Wallet lookup failed for subject {session.subject_id}: {e.message}")
            raise SigningFailedError(e.message)

        try:
            result = await self._client.sign_message(
                wallet.id,
                SIGN_MESSAGE,
                authorization_context=self._authorization_context(session),
            )
        except WalletProviderError as e:
            logger.error(f"Signing failed for wallet {wallet.id}: {e.message}")
            raise SigningFailedError(e.message)

        logger.info(f"Signed message with wallet {wallet.id}")
        return SignedMessage(
            message=SIGN_MESSAGE,
            signature=result.signature,
            wallet_address=wallet.address,
        )

    async def send_transaction(self, session: ResolvedSession) -> TransactionReceipt:
        """Send a sponsored zero-value transaction to the zero address."""
        try:
            wallet = await self.find_wallet(session.subject_id)
        except WalletProviderError as e:
            logger.error(f"Wallet lookup failed for subject {session.subject_id}: {e.message}")
            raise TransactionFailedError(e.message)

        try:
            result = await self._client.send_transaction(
                wallet.id,
                caip2=BASE_SEPOLIA_CAIP2,
                transaction={"to": ZERO_ADDRESS, "value": ZERO_VALUE},
                sponsor=True,
                authorization_context=self._authorization_context(session),
            )
        except WalletProviderError as e:
            logger.error(f"Transaction failed for wallet {wallet.id}: {e.message}")
            raise TransactionFailedError(e.message)

        logger.info(f"Sent transaction {result.hash} from wallet {wallet.id}")
        return TransactionReceipt(
            transaction_hash=result.hash,
            wallet_address=wallet.address,
            chain=BASE_SEPOLIA_CAIP2,
        )

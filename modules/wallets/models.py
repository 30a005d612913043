"""
Wallets module data models.

Provider records are parsed leniently (unknown fields are kept) since the
wallet provider adds linked account types over time. Linked accounts stay
raw dicts until selected, then become typed WalletAccount values.
"""

from typing import Any, Iterable, Optional
from pydantic import BaseModel, ConfigDict, Field

# Custody marker for wallets whose keys the provider manages
PROVIDER_WALLET_CLIENT = "privy"


# =============================================================================
# Provider records
# =============================================================================


class WalletAccount(BaseModel):
    """A provider-managed wallet linked to a user."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., description="Provider wallet ID")
    address: str = Field(..., description="Public address")
    chain_type: str = Field(..., description="Chain type (e.g. ethereum)")
    wallet_client: str = Field(default=PROVIDER_WALLET_CLIENT, description="Custody kind")
    wallet_client_type: Optional[str] = None
    connector_type: Optional[str] = None
    delegated: bool = False


class PrivyUser(BaseModel):
    """The wallet provider's user record."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Provider user ID (DID)")
    created_at: Optional[int] = Field(None, description="Creation timestamp")
    linked_accounts: list[dict[str, Any]] = Field(default_factory=list)
    custom_metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def custom_user_id(self) -> Optional[str]:
        """External identifier the record is linked to."""
        for account in self.linked_accounts:
            if account.get("type") == "custom_auth":
                return account.get("custom_user_id")
        return None

    def wallets(self, chain_type: Optional[str] = None) -> list[WalletAccount]:
        """All provider-managed wallets, optionally limited to one chain type."""
        return list(iter_embedded_wallets(self.linked_accounts, chain_type))

    def embedded_wallet(self, chain_type: Optional[str] = None) -> Optional[WalletAccount]:
        """The wallet actions run against, or None."""
        return select_embedded_wallet(self.linked_accounts, chain_type)


def iter_embedded_wallets(
    linked_accounts: Iterable[dict[str, Any]],
    chain_type: Optional[str] = None,
) -> Iterable[WalletAccount]:
    for account in linked_accounts:
        if account.get("type") != "wallet":
            continue
        if account.get("wallet_client") != PROVIDER_WALLET_CLIENT:
            continue
        if "id" not in account or not account.get("address"):
            continue
        if chain_type and account.get("chain_type") != chain_type:
            continue
        yield WalletAccount.model_validate(account)


def select_embedded_wallet(
    linked_accounts: Iterable[dict[str, Any]],
    chain_type: Optional[str] = None,
) -> Optional[WalletAccount]:
    """
    Select the first provider-managed wallet from a user's linked accounts.

    Externally custodied wallets (wallet_client other than the provider)
    and non-wallet accounts are skipped. When several wallets qualify the
    first one in provider order wins.
    """
    return next(iter(iter_embedded_wallets(linked_accounts, chain_type)), None)


class AuthorizationContext(BaseModel):
    """Credentials that authorize a wallet operation on the user's behalf."""

    user_jwts: list[str] = Field(default_factory=list)
    authorization_private_keys: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.user_jwts and not self.authorization_private_keys


class MessageSignature(BaseModel):
    """Result of a personal_sign RPC."""

    model_config = ConfigDict(extra="ignore")

    signature: str
    encoding: str = "hex"


class SentTransaction(BaseModel):
    """Result of an eth_sendTransaction RPC."""

    model_config = ConfigDict(extra="ignore")

    hash: str
    caip2: Optional[str] = None
    transaction_id: Optional[str] = None


# =============================================================================
# Action results
# =============================================================================


class SignedMessage(BaseModel):
    """A message signed by a user's wallet."""

    message: str
    signature: str
    wallet_address: str


class TransactionReceipt(BaseModel):
    """A transaction accepted by the provider (not necessarily mined)."""

    transaction_hash: str
    wallet_address: str
    chain: str


# =============================================================================
# API requests/responses
# =============================================================================


class CreateUserRequest(BaseModel):
    """Request body for user provisioning."""

    sub: Optional[str] = Field(None, description="Supabase subject identifier")
    email: Optional[str] = Field(None, description="Email address, stored as metadata")


class CreateUserResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    privy_user: PrivyUser = Field(..., alias="privyUser")


class SignMessageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    signature: str
    wallet_address: str = Field(..., alias="walletAddress")


class SendTransactionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    transaction_hash: str = Field(..., alias="transactionHash")
    wallet_address: str = Field(..., alias="walletAddress")
    chain: str


class WalletResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    wallet_id: str = Field(..., alias="walletId")
    wallet_address: str = Field(..., alias="walletAddress")
    chain_type: str = Field(..., alias="chainType")

"""
Wallets module.

Maps Supabase subjects to Privy users and their embedded wallets, and runs
the wallet actions (provision, sign, send) against Privy.

Public API:
- IWalletService: Interface for wallet operations
- WalletAccount, PrivyUser: Provider records
- Wallet exceptions: NoUserRecordError, NoWalletFoundError, etc.
"""

from .interfaces import IWalletService
from .models import PrivyUser, WalletAccount, SignedMessage, TransactionReceipt
from .exceptions import (
    MissingInputError,
    NoUserRecordError,
    NoWalletFoundError,
    WalletProviderError,
    ProvisioningFailedError,
    SigningFailedError,
    TransactionFailedError,
)

__all__ = [
    # Interface
    "IWalletService",
    # Models
    "PrivyUser",
    "WalletAccount",
    "SignedMessage",
    "TransactionReceipt",
    # Exceptions
    "MissingInputError",
    "NoUserRecordError",
    "NoWalletFoundError",
    "WalletProviderError",
    "ProvisioningFailedError",
    "SigningFailedError",
    "TransactionFailedError",
]

"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations. Sessions and tokens
are passed into each service call explicitly; services hold no request
state.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import ISessionResolver
    from modules.wallets.client import PrivyClient
    from modules.wallets.interfaces import IWalletService


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._session_resolver: "ISessionResolver | None" = None
        self._privy_client: "PrivyClient | None" = None
        self._wallet_service: "IWalletService | None" = None

    @property
    def session_resolver(self) -> "ISessionResolver":
        """Get the session resolver instance."""
        if self._session_resolver is None:
            from modules.auth.service import SessionResolver
            self._session_resolver = SessionResolver()
        return self._session_resolver

    @property
    def privy_client(self) -> "PrivyClient":
        """Get the Privy client instance."""
        if self._privy_client is None:
            from modules.wallets.client import get_privy_client
            self._privy_client = get_privy_client()
        return self._privy_client

    @property
    def wallets(self) -> "IWalletService":
        """Get the wallet service instance."""
        if self._wallet_service is None:
            from modules.wallets.service import WalletService
            from shared.config import get_settings
            self._wallet_service = WalletService(
                client=self.privy_client,
                chain_type=get_settings().wallet_chain_type,
            )
        return self._wallet_service

    async def aclose(self) -> None:
        """Close network clients held by the container."""
        if self._privy_client is not None:
            from modules.wallets.client import close_privy_client
            await close_privy_client()
        self.reset()

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._session_resolver = None
        self._privy_client = None
        self._wallet_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_session_resolver() -> "ISessionResolver":
    """FastAPI dependency for the session resolver."""
    return get_container().session_resolver


def get_wallet_service() -> "IWalletService":
    """FastAPI dependency for the wallet service."""
    return get_container().wallets

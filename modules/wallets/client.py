"""
Wallet provider (Privy) REST client.

Thin async wrapper around the endpoints this service needs: user
provisioning, user lookup by custom auth ID, and wallet RPC calls
(personal_sign, eth_sendTransaction). Failures surface as
WalletProviderError; nothing is retried here.
"""

import logging
from typing import Any, Optional

import httpx

from shared.config import get_settings

from .authorization import SIGNATURE_HEADER, sign_request
from .exceptions import WalletProviderError
from .models import AuthorizationContext, MessageSignature, PrivyUser, SentTransaction

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.privy.io"


def _error_message(response: httpx.Response) -> str:
    """Pull the provider's error message out of a failed response."""
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        for key in ("error", "message"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
    return f"Privy request failed with status {response.status_code}"


class PrivyClient:
    """
    Async client for the Privy server API.

    Authenticates with HTTP Basic (app ID / app secret) and the
    ``privy-app-id`` header. Wallet RPC calls can carry an authorization
    context; user JWTs in it are exchanged for short-lived authorization
    keys which then sign the request.
    """

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._app_id = app_id
        self._base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            auth=httpx.BasicAuth(app_id, app_secret),
            headers={
                "privy-app-id": app_id,
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @property
    def app_id(self) -> str:
        return self._app_id

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        try:
            response = await self._http.request(method, path, json=body, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Privy request {method} {path} failed: {e}")
            raise WalletProviderError(f"Privy request failed: {e}")

        if response.is_error:
            message = _error_message(response)
            if response.status_code != 404:
                logger.warning(
                    f"Privy {method} {path} returned {response.status_code}: {message}"
                )
            raise WalletProviderError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError:
            raise WalletProviderError("Privy returned a malformed response")

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    async def create_user(
        self,
        linked_accounts: list[dict[str, Any]],
        wallets: Optional[list[dict[str, Any]]] = None,
        custom_metadata: Optional[dict[str, Any]] = None,
    ) -> PrivyUser:
        """
        Create a user, optionally pregenerating wallets in the same call.

        Args:
            linked_accounts: Accounts to link (e.g. custom_auth)
            wallets: Wallets to create, e.g. [{"chain_type": "ethereum"}]
            custom_metadata: Arbitrary metadata stored on the user

        Returns:
            The created PrivyUser
        """
        body: dict[str, Any] = {"linked_accounts": linked_accounts}
        if wallets:
            body["wallets"] = wallets
        if custom_metadata:
            body["custom_metadata"] = custom_metadata

        data = await self._request("POST", "/v1/users", body)
        return PrivyUser.model_validate(data)

    async def get_user_by_custom_auth_id(self, custom_user_id: str) -> Optional[PrivyUser]:
        """
        Look up a user by the ID they were linked with through custom auth.

        Returns:
            The PrivyUser, or None if no user is linked to the ID
        """
        try:
            data = await self._request(
                "POST",
                "/v1/users/custom_auth/id",
                {"custom_user_id": custom_user_id},
            )
        except WalletProviderError as e:
            if e.is_not_found:
                return None
            raise
        return PrivyUser.model_validate(data)

    # -------------------------------------------------------------------------
    # Wallets
    # -------------------------------------------------------------------------

    async def authenticate(self, user_jwt: str) -> str:
        """
        Exchange a user JWT for a short-lived authorization key.

        Returns:
            Base64 PKCS#8 authorization key
        """
        data = await self._request(
            "POST", "/v1/wallets/authenticate", {"user_jwt": user_jwt}
        )
        key = data.get("authorization_key")
        if not key:
            raise WalletProviderError("Privy did not return an authorization key")
        return key

    async def _authorization_headers(
        self,
        url: str,
        body: dict[str, Any],
        context: Optional[AuthorizationContext],
    ) -> dict[str, str]:
        if context is None or context.is_empty:
            return {}

        keys = list(context.authorization_private_keys)
        for user_jwt in context.user_jwts:
            keys.append(await self.authenticate(user_jwt))

        try:
            signatures = [
                sign_request(key, "POST", url, body, self._app_id) for key in keys
            ]
        except ValueError as e:
            raise WalletProviderError(f"Could not sign wallet request: {e}")
        return {SIGNATURE_HEADER: ",".join(signatures)}

    async def rpc(
        self,
        wallet_id: str,
        body: dict[str, Any],
        authorization_context: Optional[AuthorizationContext] = None,
    ) -> dict[str, Any]:
        """
        Call a wallet RPC method.

        Returns:
            The ``data`` object of the RPC response
        """
        path = f"/v1/wallets/{wallet_id}/rpc"
        headers = await self._authorization_headers(
            f"{self._base_url}{path}", body, authorization_context
        )
        result = await self._request("POST", path, body, headers=headers)
        data = result.get("data")
        if not isinstance(data, dict):
            raise WalletProviderError(f"Privy RPC {body.get('method')} returned no data")
        return data

    async def sign_message(
        self,
        wallet_id: str,
        message: str,
        authorization_context: Optional[AuthorizationContext] = None,
    ) -> MessageSignature:
        """Sign a UTF-8 message with personal_sign."""
        data = await self.rpc(
            wallet_id,
            {
                "method": "personal_sign",
                "params": {"message": message, "encoding": "utf-8"},
            },
            authorization_context,
        )
        return MessageSignature.model_validate(data)

    async def send_transaction(
        self,
        wallet_id: str,
        caip2: str,
        transaction: dict[str, Any],
        sponsor: bool = False,
        authorization_context: Optional[AuthorizationContext] = None,
    ) -> SentTransaction:
        """
        Sign and broadcast an EVM transaction.

        Returns as soon as the provider accepts the transaction; inclusion
        is not awaited.
        """
        data = await self.rpc(
            wallet_id,
            {
                "method": "eth_sendTransaction",
                "caip2": caip2,
                "chain_type": "ethereum",
                "sponsor": sponsor,
                "params": {"transaction": transaction},
            },
            authorization_context,
        )
        return SentTransaction.model_validate(data)


# Module-level client cache
_client_instance: Optional[PrivyClient] = None


def get_privy_client() -> PrivyClient:
    """
    Get the cached Privy client.

    Raises:
        RuntimeError: If the Privy app credentials are not configured
    """
    global _client_instance

    if _client_instance is None:
        settings = get_settings()
        if not settings.privy_app_id or not settings.privy_app_secret:
            raise RuntimeError(
                "Privy configuration missing. "
                "Set PRIVY_APP_ID and PRIVY_APP_SECRET environment variables."
            )
        _client_instance = PrivyClient(
            settings.privy_app_id,
            settings.privy_app_secret,
            base_url=settings.privy_api_url,
            timeout=settings.privy_timeout,
        )

    return _client_instance


async def close_privy_client() -> None:
    """Close and forget the cached client."""
    global _client_instance
    if _client_instance is not None:
        await _client_instance.aclose()
        _client_instance = None


def reset_privy_client() -> None:
    """Forget the cached client without closing it (for testing)."""
    global _client_instance
    _client_instance = None

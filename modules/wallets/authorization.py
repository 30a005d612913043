"""
Request authorization signatures for wallet provider RPC calls.

Wallet RPC requests on user-owned wallets must carry a
``privy-authorization-signature`` header: an ECDSA P-256 / SHA-256 signature
over the canonical JSON of the request, made with an authorization key.
"""

import base64
import binascii
import json
from typing import Any

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec

AUTHORIZATION_KEY_PREFIX = "wallet-auth:"
SIGNATURE_HEADER = "privy-authorization-signature"


def canonicalize(obj: Any) -> str:
    """
    JSON canonicalization.

    Sorts dictionary keys and uses compact separators.
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"))


def build_signature_payload(
    method: str,
    url: str,
    body: dict[str, Any],
    app_id: str,
) -> dict[str, Any]:
    """Build the payload the provider expects to be signed."""
    return {
        "version": 1,
        "method": method,
        "url": url,
        "body": body,
        "headers": {"privy-app-id": app_id},
    }


def load_authorization_key(authorization_key: str) -> ec.EllipticCurvePrivateKey:
    """
    Load a base64 PKCS#8 authorization key.

    Raises:
        ValueError: If the key cannot be parsed or is not an EC key
    """
    key_body = authorization_key.strip()
    if key_body.startswith(AUTHORIZATION_KEY_PREFIX):
        key_body = key_body[len(AUTHORIZATION_KEY_PREFIX):]

    try:
        der = base64.b64decode(key_body, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Authorization key is not valid base64: {e}")
    private_key = serialization.load_der_private_key(der, password=None)
    if not isinstance(private_key, ec.EllipticCurvePrivateKey):
        raise ValueError("Authorization key is not an EC private key")
    return private_key


def sign_request(
    authorization_key: str,
    method: str,
    url: str,
    body: dict[str, Any],
    app_id: str,
) -> str:
    """
    Sign a provider request with an authorization key.

    Args:
        authorization_key: Base64 PKCS#8 P-256 key, optionally prefixed
        method: HTTP method of the request
        url: Full request URL
        body: JSON request body
        app_id: Provider app ID

    Returns:
        Base64-encoded DER signature
    """
    private_key = load_authorization_key(authorization_key)
    payload = canonicalize(build_signature_payload(method, url, body, app_id))
    signature = private_key.sign(payload.encode("utf-8"), ec.ECDSA(hashes.SHA256()))
    return base64.b64encode(signature).decode("utf-8")

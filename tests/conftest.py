"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import base64
import json

import pytest
from datetime import datetime, timezone, timedelta
from unittest.mock import MagicMock
import jwt  # PyJWT

from api.dependencies import reset_container
from modules.auth.service import reset_session_resolver
from modules.wallets.client import reset_privy_client
from shared.database import reset_client_cache


# Test signing secret; tokens are only decoded locally, Supabase is mocked
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_SUPABASE_URL = "https://testproject.supabase.co"
TEST_ISSUER = f"{TEST_SUPABASE_URL}/auth/v1"
TEST_COOKIE_NAME = "sb-testproject-auth-token"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    issuer: str = TEST_ISSUER,
) -> str:
    """
    Create a Supabase-style access token.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        issuer: Token issuer

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "iss": issuer,
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


def create_session_cookie(access_token: str, encoded: bool = True) -> str:
    """Build a Supabase SSR session cookie value for an access token."""
    session = json.dumps({
        "access_token": access_token,
        "refresh_token": "refresh-token",
        "token_type": "bearer",
    })
    if not encoded:
        return session
    return "base64-" + base64.urlsafe_b64encode(session.encode()).decode().rstrip("=")


def make_supabase_user(user_id: str = "test-user-123", email: str = "test@example.com"):
    """Mock of the user object returned by supabase auth.get_user."""
    user = MagicMock()
    user.id = user_id
    user.email = email
    user.email_confirmed_at = datetime.now(timezone.utc)
    user.last_sign_in_at = datetime.now(timezone.utc)
    return user


def make_wallet_account(
    wallet_id: str = "wallet-abc",
    address: str = "0x1111111111111111111111111111111111111111",
    chain_type: str = "ethereum",
    wallet_client: str = "privy",
) -> dict:
    """A linked account entry as returned by Privy."""
    return {
        "type": "wallet",
        "id": wallet_id,
        "address": address,
        "chain_type": chain_type,
        "wallet_client": wallet_client,
        "wallet_client_type": wallet_client,
        "connector_type": "embedded",
        "delegated": False,
    }


def make_privy_user(
    custom_user_id: str = "test-user-123",
    wallets: list[dict] | None = None,
) -> dict:
    """A Privy user record as returned by the REST API."""
    linked_accounts = [{"type": "custom_auth", "custom_user_id": custom_user_id}]
    linked_accounts.extend(wallets if wallets is not None else [make_wallet_account()])
    return {
        "id": "did:privy:cm0000000000000000000000",
        "created_at": 1704067200,
        "linked_accounts": linked_accounts,
        "custom_metadata": {},
    }


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached services and clients before and after each test."""
    reset_session_resolver()
    reset_privy_client()
    reset_client_cache()
    reset_container()
    yield
    reset_session_resolver()
    reset_privy_client()
    reset_client_cache()
    reset_container()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def auth_token(test_user_id: str) -> str:
    """Create a valid access token for testing."""
    return create_test_token(user_id=test_user_id)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
